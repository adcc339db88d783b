"""Config settings – EnvSettingsLoader and config-file reading."""
from __future__ import annotations

import abc
import dataclasses
from collections.abc import Mapping
from pathlib import Path
from typing import Any, TypeVar

from dotenv import dotenv_values

from sms_notify.config.settings.base import Settings
from sms_notify.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

T = TypeVar("T", bound=Settings)

DEFAULT_CONFIG_FILE = Path.home() / ".config" / "notify" / ".env"

_TRUTHY = ("1", "true", "yes", "on")


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Load settings from an environment mapping.

    The mapping is injected rather than read from ``os.environ`` so callers
    decide which sources feed it. Empty or whitespace-only values count as
    absent. Every missing required variable is reported at once.
    """

    def __init__(self, environ: Mapping[str, str | None]) -> None:
        self._environ = environ

    def get(self, key: str) -> str | None:
        raw = self._environ.get(key)
        if raw is None or not raw.strip():
            return None
        return raw.strip()

    def has(self, *keys: str) -> bool:
        return all(self.get(k) is not None for k in keys)

    def load(self, settings_class: type[T]) -> T:
        kwargs: dict[str, Any] = {}
        missing: list[str] = []

        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            env_key = settings_class.env_key(field)
            raw = self.get(env_key)

            if raw is None:
                if (
                    field.default is dataclasses.MISSING
                    and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
                ):
                    missing.append(env_key)
                continue

            kwargs[field.name] = self._coerce(env_key, raw, field.type)

        if missing:
            raise MissingRequiredSettingError(missing)

        try:
            return settings_class(**kwargs)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to load settings: {exc}", cause=exc) from exc

    def _coerce(self, env_key: str, value: str, type_hint: Any) -> Any:
        if type_hint is bool or type_hint == "bool":
            return value.lower() in _TRUTHY
        if type_hint is int or type_hint == "int":
            try:
                return int(value)
            except ValueError as exc:
                raise InvalidSettingValueError(env_key, value, "expected an integer") from exc
        return value


def load_config_file(path: str | Path | None = None) -> dict[str, str]:
    """Read ``KEY=value`` pairs from a dotenv file.

    A missing file yields an empty dict; lines the parser cannot read are
    skipped. Keys without a value are dropped.
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_FILE
    if not config_path.is_file():
        return {}
    values = dotenv_values(config_path)
    return {key: value for key, value in values.items() if value is not None}


__all__ = [
    "DEFAULT_CONFIG_FILE",
    "EnvSettingsLoader",
    "SettingsLoader",
    "load_config_file",
]
