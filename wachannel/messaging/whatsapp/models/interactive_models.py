"""
Outbound interactive message models.

Reply-button messages (up to 3 buttons) and list messages (sections of rows
opened from a single trigger button).
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from wachannel.messaging.whatsapp.models.basic_models import WireMessageBase

LIST_ROW_DESCRIPTION_LIMIT = 72


class InteractiveType(str, Enum):
    BUTTON = "button"
    LIST = "list"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class InteractiveText(_Frozen):
    text: str


class InteractiveHeader(_Frozen):
    type: Literal["text"] = "text"
    text: str


class ReplyButtonReply(_Frozen):
    id: str = Field(..., description="Postback reported when the button is tapped")
    title: str = Field(..., description="Button label (provider limit 20)")


class ReplyButton(_Frozen):
    type: Literal["reply"] = "reply"
    reply: ReplyButtonReply


class ListRow(_Frozen):
    id: str = Field(..., description="Postback reported when the row is picked")
    title: str = Field(..., description="Row title (provider limit 24)")
    description: str | None = Field(None, max_length=LIST_ROW_DESCRIPTION_LIMIT)


class ListSection(_Frozen):
    title: str | None = None
    rows: list[ListRow] = Field(..., min_length=1)


class InteractiveAction(_Frozen):
    buttons: list[ReplyButton] | None = None
    button: str | None = Field(None, description="List trigger label")
    sections: list[ListSection] | None = None


class Interactive(_Frozen):
    type: InteractiveType
    header: InteractiveHeader | None = None
    body: InteractiveText
    footer: InteractiveText | None = None
    action: InteractiveAction

    @model_validator(mode="after")
    def validate_action(self):
        if self.type == InteractiveType.BUTTON and not self.action.buttons:
            raise ValueError("Button messages need at least one reply button")
        if self.type == InteractiveType.LIST and not (
            self.action.sections and self.action.button
        ):
            raise ValueError("List messages need sections and a trigger label")
        return self


class InteractiveMessage(WireMessageBase):
    type: Literal["interactive"] = "interactive"
    interactive: Interactive
