"""
The ``whatsapp_channel`` setting group.

The host engine stores these settings and hands them back as a flat mapping of
label -> value. ``ChannelSettings`` is the typed view the handler works with.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from wachannel.core.config.settings import settings
from wachannel.domain.interfaces.settings_interface import ISettingsProvider

CHANNEL_NAME = "whatsapp-channel"
SETTINGS_GROUP = "whatsapp_channel"

DEFAULT_GREETING_TEXT = "Welcome! Ready to start a conversation with our chatbot?"
DEFAULT_USER_FIELDS = "first_name,last_name,profile_pic,locale,timezone,gender"


class ChannelConfigurationError(Exception):
    """A required channel setting is missing or empty."""

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"WhatsApp setting '{label}' is not set!")


class SettingLabel(str, Enum):
    """Labels of the whatsapp_channel setting group."""

    APP_SECRET = "app_secret"
    ACCESS_TOKEN = "access_token"
    VERIFY_TOKEN = "verify_token"
    GET_STARTED_BUTTON = "get_started_button"
    COMPOSER_INPUT_DISABLED = "composer_input_disabled"
    GREETING_TEXT = "greeting_text"
    USER_FIELDS = "user_fields"


class SettingType(str, Enum):
    SECRET = "secret"
    TEXT = "text"
    TEXTAREA = "textarea"
    CHECKBOX = "checkbox"


class ChannelSetting(BaseModel):
    """One entry of the setting group as registered with the host."""

    group: str = SETTINGS_GROUP
    label: SettingLabel
    value: Any
    type: SettingType

    model_config = ConfigDict(frozen=True)


DEFAULT_CHANNEL_SETTINGS: tuple[ChannelSetting, ...] = (
    ChannelSetting(label=SettingLabel.APP_SECRET, value="", type=SettingType.SECRET),
    ChannelSetting(
        label=SettingLabel.ACCESS_TOKEN, value="", type=SettingType.SECRET
    ),
    ChannelSetting(
        label=SettingLabel.VERIFY_TOKEN, value="", type=SettingType.SECRET
    ),
    ChannelSetting(
        label=SettingLabel.GET_STARTED_BUTTON, value=False, type=SettingType.CHECKBOX
    ),
    ChannelSetting(
        label=SettingLabel.COMPOSER_INPUT_DISABLED,
        value=False,
        type=SettingType.CHECKBOX,
    ),
    ChannelSetting(
        label=SettingLabel.GREETING_TEXT,
        value=DEFAULT_GREETING_TEXT,
        type=SettingType.TEXTAREA,
    ),
    ChannelSetting(
        label=SettingLabel.USER_FIELDS, value=DEFAULT_USER_FIELDS, type=SettingType.TEXT
    ),
)


class ChannelSettings(BaseModel):
    """Typed view of the whatsapp_channel setting group."""

    app_secret: str = ""
    access_token: str = ""
    verify_token: str = ""
    get_started_button: bool = False
    composer_input_disabled: bool = False
    greeting_text: str = DEFAULT_GREETING_TEXT
    user_fields: str = DEFAULT_USER_FIELDS

    model_config = ConfigDict(frozen=True, extra="ignore")

    @classmethod
    def defaults(cls) -> dict[str, Any]:
        return {s.label.value: s.value for s in DEFAULT_CHANNEL_SETTINGS}

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> "ChannelSettings":
        """Build settings from a label -> value mapping, ignoring None values."""
        merged = cls.defaults()
        merged.update({k: v for k, v in values.items() if v is not None})
        return cls(**merged)

    def require(self, label: SettingLabel) -> str:
        """Return a non-empty secret or raise ChannelConfigurationError."""
        value = getattr(self, label.value)
        if not value:
            raise ChannelConfigurationError(label.value)
        return value

    @property
    def user_field_list(self) -> list[str]:
        return [f.strip() for f in self.user_fields.split(",") if f.strip()]


class EnvSettingsProvider(ISettingsProvider):
    """Settings provider backed by environment variables and in-process updates."""

    def __init__(self, overrides: dict[str, Any] | None = None):
        self._values: dict[str, Any] = {
            SettingLabel.APP_SECRET.value: settings.whatsapp_app_secret,
            SettingLabel.ACCESS_TOKEN.value: settings.whatsapp_access_token,
            SettingLabel.VERIFY_TOKEN.value: settings.whatsapp_verify_token,
            SettingLabel.GREETING_TEXT.value: settings.whatsapp_greeting_text,
        }
        if overrides:
            self._values.update(overrides)

    async def get_settings(self) -> ChannelSettings:
        return ChannelSettings.from_mapping(self._values)

    async def update_setting(self, label: str, value: Any) -> ChannelSettings:
        if label not in SettingLabel._value2member_map_:
            raise KeyError(f"Unknown {SETTINGS_GROUP} setting: {label}")
        self._values[label] = value
        return await self.get_settings()
