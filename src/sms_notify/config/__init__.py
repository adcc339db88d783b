"""Config – environment-backed settings, credential bundles and backend resolution."""

from sms_notify.config.credentials import (
    CARRIER_GATEWAYS,
    CredentialBundle,
    EmailGatewayCredentials,
    NtfyCredentials,
    PushoverCredentials,
    TwilioCredentials,
    supported_carriers,
)
from sms_notify.config.resolver import (
    Environ,
    ProviderKind,
    detect_provider,
    load_credentials,
    load_email_credentials,
    load_ntfy_credentials,
    load_pushover_credentials,
    load_twilio_credentials,
    no_provider_error,
)
from sms_notify.config.settings import EnvSettingsLoader, Settings, load_config_file
from sms_notify.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "CARRIER_GATEWAYS",
    "ConfigError",
    "CredentialBundle",
    "EmailGatewayCredentials",
    "EnvSettingsLoader",
    "Environ",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "NtfyCredentials",
    "ProviderKind",
    "PushoverCredentials",
    "Settings",
    "TwilioCredentials",
    "detect_provider",
    "load_config_file",
    "load_credentials",
    "load_email_credentials",
    "load_ntfy_credentials",
    "load_pushover_credentials",
    "load_twilio_credentials",
    "no_provider_error",
    "supported_carriers",
]
