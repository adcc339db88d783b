"""Config validation errors."""
from __future__ import annotations

from collections.abc import Sequence

from sms_notify.kernel.errors import BaseError


class ConfigError(BaseError):
    """Raised when configuration is invalid or loading failed."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """One or more required environment variables are absent or empty."""
    default_code = "missing_required_setting"

    def __init__(self, setting_names: str | Sequence[str]) -> None:
        names = [setting_names] if isinstance(setting_names, str) else list(setting_names)
        if len(names) == 1:
            message = f"Missing required environment variable: {names[0]}"
        else:
            message = f"Missing required environment variables: {', '.join(names)}"
        super().__init__(message, detail={"missing": names})
        self.setting_names = names

    @property
    def setting_name(self) -> str:
        return self.setting_names[0]


class InvalidSettingValueError(ConfigError):
    """A setting's value is present but semantically invalid."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}"
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
