"""Config settings – environment-backed configuration."""
from sms_notify.config.settings.base import Settings, env_field
from sms_notify.config.settings.loaders import (
    DEFAULT_CONFIG_FILE,
    EnvSettingsLoader,
    SettingsLoader,
    load_config_file,
)

__all__ = [
    "DEFAULT_CONFIG_FILE",
    "EnvSettingsLoader",
    "Settings",
    "SettingsLoader",
    "env_field",
    "load_config_file",
]
