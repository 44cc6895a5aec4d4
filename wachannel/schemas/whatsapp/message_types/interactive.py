"""
WhatsApp interactive and button reply content.

``interactive`` messages carry either a button_reply or a list_reply;
``button`` messages are replies to template quick-reply buttons and carry a
payload plus the button text.
"""

from pydantic import BaseModel, ConfigDict, Field


class ButtonReply(BaseModel):
    """Reply data from an interactive button."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    id: str = Field(..., description="Button ID (set when creating the button)")
    title: str = Field("", description="Button label text displayed to user")


class ListReply(BaseModel):
    """Reply data from an interactive list selection."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    id: str = Field(..., description="Row ID (set when creating the list row)")
    title: str = Field("", description="Row title displayed to user")
    description: str | None = Field(None, description="Row description")


class InteractiveContent(BaseModel):
    """Interactive reply content: a button reply or a list reply."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    type: str = Field(..., description="button_reply, list_reply, nfm_reply...")
    button_reply: ButtonReply | None = None
    list_reply: ListReply | None = None


class ButtonContent(BaseModel):
    """Template quick-reply button content."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    payload: str = Field("", description="Developer-defined button payload")
    text: str = Field("", description="Button label text")
