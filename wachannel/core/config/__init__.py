from .channel_settings import (
    CHANNEL_NAME,
    SETTINGS_GROUP,
    ChannelConfigurationError,
    ChannelSettings,
    EnvSettingsProvider,
    SettingLabel,
)
from .settings import Settings, settings

__all__ = [
    "CHANNEL_NAME",
    "SETTINGS_GROUP",
    "ChannelConfigurationError",
    "ChannelSettings",
    "EnvSettingsProvider",
    "SettingLabel",
    "Settings",
    "settings",
]
