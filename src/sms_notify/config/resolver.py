"""Credential resolution – pick the active backend and load its secrets.

The environment is always passed in as a mapping; nothing here reads
``os.environ``.
"""
from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Final, TypeVar

from sms_notify.config.credentials import (
    CredentialBundle,
    EmailGatewayCredentials,
    NtfyCredentials,
    PushoverCredentials,
    TwilioCredentials,
    supported_carriers,
)
from sms_notify.config.settings import EnvSettingsLoader
from sms_notify.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)
from sms_notify.kernel.errors import ErrorDetail, ErrorKind
from sms_notify.kernel.types import Err, Ok, Result
from sms_notify.observability.logging import get_logger

logger = get_logger(__name__)

C = TypeVar("C", PushoverCredentials, NtfyCredentials, TwilioCredentials, EmailGatewayCredentials)

Environ = Mapping[str, str | None]


class ProviderKind(str, Enum):
    """Supported backends, in detection priority order."""

    PUSHOVER = "pushover"
    NTFY = "ntfy"
    TWILIO = "twilio"
    EMAIL = "email"
    NONE = "none"

    @property
    def is_push(self) -> bool:
        """Push backends deliver to a fixed topic/device and ignore the destination."""
        return self in (ProviderKind.PUSHOVER, ProviderKind.NTFY)


# Presence checks used for detection only; loaders re-validate every field.
_DETECTION_KEYS: Final[tuple[tuple[ProviderKind, tuple[str, ...]], ...]] = (
    (ProviderKind.PUSHOVER, ("PUSHOVER_USER", "PUSHOVER_TOKEN")),
    (ProviderKind.NTFY, ("NTFY_TOPIC",)),
    (ProviderKind.TWILIO, ("TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN")),
    (ProviderKind.EMAIL, ("EMAIL_USER", "EMAIL_PASS")),
)

_WHERE_TO_GET: Final[dict[ProviderKind, str]] = {
    ProviderKind.PUSHOVER: "Get these values from https://pushover.net",
    ProviderKind.NTFY: "Then subscribe to this topic on your phone using the ntfy app.",
    ProviderKind.TWILIO: "Get these values from https://console.twilio.com",
    ProviderKind.EMAIL: f"Supported carriers: {', '.join(supported_carriers())}",
}

NO_PROVIDER_GUIDANCE: Final = """\
Please configure a provider:

Pushover ($5, reliable):
  export PUSHOVER_USER="your-user-key"
  export PUSHOVER_TOKEN="your-api-token"

ntfy.sh (free):
  export NTFY_TOPIC="my-alerts"

Twilio:
  export TWILIO_ACCOUNT_SID="..."
  export TWILIO_AUTH_TOKEN="..."
  export TWILIO_PHONE_NUMBER="..."

Email gateway:
  export EMAIL_USER="you@gmail.com"
  export EMAIL_PASS="your-app-password"
  export SMS_CARRIER="att"
""".rstrip()


def detect_provider(environ: Environ) -> ProviderKind:
    """Return the highest-priority backend whose key variables are non-empty."""
    env = EnvSettingsLoader(environ)
    for kind, keys in _DETECTION_KEYS:
        if env.has(*keys):
            return kind
    return ProviderKind.NONE


def no_provider_error() -> ErrorDetail:
    return ErrorDetail(
        kind=ErrorKind.MISSING_CONFIG,
        message="No SMS provider configured",
        guidance=NO_PROVIDER_GUIDANCE,
    )


def _missing_config(kind: ProviderKind, exc: ConfigError) -> ErrorDetail:
    hint = _WHERE_TO_GET[kind]
    if isinstance(exc, MissingRequiredSettingError):
        exports = "\n".join(f'  export {name}="your-value"' for name in exc.setting_names)
        lead = (
            "Please set the following environment variables:"
            if len(exc.setting_names) > 1
            else "Please set the following environment variable:"
        )
        guidance = f"{lead}\n{exports}\n\n{hint}"
    elif isinstance(exc, InvalidSettingValueError):
        guidance = f'Please correct {exc.setting_name}:\n  export {exc.setting_name}="..."\n\n{exc.reason}.\n{hint}'
    else:
        guidance = hint
    return ErrorDetail(kind=ErrorKind.MISSING_CONFIG, message=exc.message, guidance=guidance)


def _load(kind: ProviderKind, settings_class: type[C], environ: Environ) -> Result[C, ErrorDetail]:
    try:
        credentials = EnvSettingsLoader(environ).load(settings_class)
    except ConfigError as exc:
        logger.debug("credentials.load.failed", provider=kind.value, error=exc.message)
        return Err(_missing_config(kind, exc))
    logger.debug("credentials.load.ok", provider=kind.value)
    return Ok(credentials)


def load_pushover_credentials(environ: Environ) -> Result[PushoverCredentials, ErrorDetail]:
    return _load(ProviderKind.PUSHOVER, PushoverCredentials, environ)


def load_ntfy_credentials(environ: Environ) -> Result[NtfyCredentials, ErrorDetail]:
    return _load(ProviderKind.NTFY, NtfyCredentials, environ)


def load_twilio_credentials(environ: Environ) -> Result[TwilioCredentials, ErrorDetail]:
    return _load(ProviderKind.TWILIO, TwilioCredentials, environ)


def load_email_credentials(environ: Environ) -> Result[EmailGatewayCredentials, ErrorDetail]:
    return _load(ProviderKind.EMAIL, EmailGatewayCredentials, environ)


def load_credentials(kind: ProviderKind, environ: Environ) -> Result[CredentialBundle, ErrorDetail]:
    """Load the bundle for *kind*; ``NONE`` yields the no-provider error."""
    match kind:
        case ProviderKind.PUSHOVER:
            return load_pushover_credentials(environ)
        case ProviderKind.NTFY:
            return load_ntfy_credentials(environ)
        case ProviderKind.TWILIO:
            return load_twilio_credentials(environ)
        case ProviderKind.EMAIL:
            return load_email_credentials(environ)
        case ProviderKind.NONE:
            return Err(no_provider_error())


__all__ = [
    "Environ",
    "NO_PROVIDER_GUIDANCE",
    "ProviderKind",
    "detect_provider",
    "load_credentials",
    "load_email_credentials",
    "load_ntfy_credentials",
    "load_pushover_credentials",
    "load_twilio_credentials",
    "no_provider_error",
]
