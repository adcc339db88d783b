"""Config settings – Settings base class and env_field helper."""
from __future__ import annotations

import dataclasses
from typing import Any, ClassVar

ENV_METADATA_KEY = "env"


@dataclasses.dataclass(frozen=True)
class Settings:
    """Base class for environment-backed settings.

    Field values are never partially populated: either every required
    field is present or the loader raises before construction.
    """

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""

    @classmethod
    def env_key(cls, field: dataclasses.Field[Any]) -> str:
        """Return the environment variable backing *field*."""
        explicit = field.metadata.get(ENV_METADATA_KEY)
        if explicit:
            return explicit
        return f"{cls._prefix}_{field.name}".upper().lstrip("_")

    @classmethod
    def required_env_keys(cls) -> list[str]:
        return [
            cls.env_key(f)
            for f in dataclasses.fields(cls)
            if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING
        ]


def env_field(name: str, default: Any = dataclasses.MISSING, *, repr: bool = True) -> Any:  # noqa: A002
    """Declare a dataclass field read from environment variable *name*."""
    return dataclasses.field(default=default, repr=repr, metadata={ENV_METADATA_KEY: name})


__all__ = ["Settings", "env_field"]
