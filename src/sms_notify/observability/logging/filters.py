"""Observability – SensitiveFieldsFilter and destination masking."""
from __future__ import annotations

from typing import Any, Final

DEFAULT_SENSITIVE_FIELDS: Final = frozenset({
    "api_token",
    "auth_token",
    "authorization",
    "pass",
    "password",
    "secret",
    "token",
    "user_key",
})


class SensitiveFieldsFilter:
    """Replace values of sensitive keys with ``[REDACTED]``."""

    REDACTED = "[REDACTED]"

    def __init__(self, sensitive_fields: frozenset[str] | None = None) -> None:
        self._fields = sensitive_fields or DEFAULT_SENSITIVE_FIELDS

    def redact_deep(self, data: dict[str, Any]) -> dict[str, Any]:
        """Recursively redact nested dicts."""
        result: dict[str, Any] = {}
        for k, v in data.items():
            if k.lower() in self._fields:
                result[k] = self.REDACTED
            elif isinstance(v, dict):
                result[k] = self.redact_deep(v)
            else:
                result[k] = v
        return result

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:  # noqa: ARG002
        return self.redact_deep(event_dict)


def mask_destination(value: str, keep: int = 4) -> str:
    """Hide all but the last *keep* characters, e.g. ``*******2671``."""
    value = (value or "").strip()
    if len(value) <= keep:
        return "*" * len(value)
    return "*" * (len(value) - keep) + value[-keep:]


__all__ = ["DEFAULT_SENSITIVE_FIELDS", "SensitiveFieldsFilter", "mask_destination"]
