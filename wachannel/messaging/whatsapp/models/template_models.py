"""Outbound template message models."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from wachannel.messaging.whatsapp.models.basic_models import WireMessageBase


class TemplateLanguage(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str = Field("en_US", description="Language/locale code of the template")


class TemplateComponent(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["header", "body", "button"]
    sub_type: str | None = None
    index: str | None = None
    parameters: list[dict[str, Any]] = Field(default_factory=list)


class Template(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    language: TemplateLanguage = Field(default_factory=TemplateLanguage)
    components: list[TemplateComponent] | None = None


class TemplateMessage(WireMessageBase):
    type: Literal["template"] = "template"
    template: Template
