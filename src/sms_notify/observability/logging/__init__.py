"""Observability – structured logging helpers."""
from sms_notify.observability.logging.factory import (
    DEFAULT_LEVEL,
    configure_logging,
    get_logger,
    resolve_level,
)
from sms_notify.observability.logging.filters import (
    DEFAULT_SENSITIVE_FIELDS,
    SensitiveFieldsFilter,
    mask_destination,
)

__all__ = [
    "DEFAULT_LEVEL",
    "DEFAULT_SENSITIVE_FIELDS",
    "SensitiveFieldsFilter",
    "configure_logging",
    "get_logger",
    "mask_destination",
    "resolve_level",
]
