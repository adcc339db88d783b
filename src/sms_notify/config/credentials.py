"""Credential bundles – one frozen settings dataclass per backend."""
from __future__ import annotations

import dataclasses
from typing import Final, TypeAlias

from sms_notify.config.settings import Settings, env_field
from sms_notify.config.validation import InvalidSettingValueError

DEFAULT_SMTP_HOST: Final = "smtp.gmail.com"
DEFAULT_SMTP_PORT: Final = 587
DEFAULT_NTFY_SERVER: Final = "https://ntfy.sh"

# Carrier email-to-SMS gateway domains.
CARRIER_GATEWAYS: Final[dict[str, str]] = {
    "att": "txt.att.net",
    "tmobile": "tmomail.net",
    "verizon": "vtext.com",
    "sprint": "messaging.sprintpcs.com",
    "uscellular": "email.uscc.net",
    "boost": "sms.myboostmobile.com",
    "cricket": "sms.cricketwireless.net",
    "metropcs": "mymetropcs.com",
    "virgin": "vmobl.com",
}


def supported_carriers() -> list[str]:
    return list(CARRIER_GATEWAYS)


@dataclasses.dataclass(frozen=True)
class PushoverCredentials(Settings):
    user_key: str = env_field("PUSHOVER_USER", repr=False)
    api_token: str = env_field("PUSHOVER_TOKEN", repr=False)


@dataclasses.dataclass(frozen=True)
class NtfyCredentials(Settings):
    topic: str = env_field("NTFY_TOPIC")
    server: str = env_field("NTFY_SERVER", DEFAULT_NTFY_SERVER)

    def _validate(self) -> None:
        if not self.server.startswith(("http://", "https://")):
            raise InvalidSettingValueError("NTFY_SERVER", self.server, "expected an http(s) URL")

    @property
    def url(self) -> str:
        return f"{self.server.rstrip('/')}/{self.topic}"


@dataclasses.dataclass(frozen=True)
class TwilioCredentials(Settings):
    account_sid: str = env_field("TWILIO_ACCOUNT_SID")
    auth_token: str = env_field("TWILIO_AUTH_TOKEN", repr=False)
    from_number: str = env_field("TWILIO_PHONE_NUMBER")


@dataclasses.dataclass(frozen=True)
class EmailGatewayCredentials(Settings):
    user: str = env_field("EMAIL_USER")
    password: str = env_field("EMAIL_PASS", repr=False)
    carrier: str = env_field("SMS_CARRIER")
    host: str = env_field("EMAIL_HOST", DEFAULT_SMTP_HOST)
    port: int = env_field("EMAIL_PORT", DEFAULT_SMTP_PORT)
    secure: bool = env_field("EMAIL_SECURE", False)

    def _validate(self) -> None:
        if self.carrier.lower() not in CARRIER_GATEWAYS:
            raise InvalidSettingValueError(
                "SMS_CARRIER",
                self.carrier,
                f"unknown carrier; supported: {', '.join(CARRIER_GATEWAYS)}",
            )
        if not 0 < self.port < 65536:
            raise InvalidSettingValueError("EMAIL_PORT", self.port, "expected a TCP port (1-65535)")

    @property
    def gateway_domain(self) -> str:
        return CARRIER_GATEWAYS[self.carrier.lower()]


CredentialBundle: TypeAlias = PushoverCredentials | NtfyCredentials | TwilioCredentials | EmailGatewayCredentials

__all__ = [
    "CARRIER_GATEWAYS",
    "CredentialBundle",
    "DEFAULT_NTFY_SERVER",
    "DEFAULT_SMTP_HOST",
    "DEFAULT_SMTP_PORT",
    "EmailGatewayCredentials",
    "NtfyCredentials",
    "PushoverCredentials",
    "TwilioCredentials",
    "supported_carriers",
]
