"""Application notifications – build the provider for a credential bundle."""
from __future__ import annotations

from typing import Callable, TypeAlias, assert_never

from sms_notify.application.notifications.email_gateway import EmailGatewaySmsProvider
from sms_notify.application.notifications.ntfy import NtfyPushProvider
from sms_notify.application.notifications.provider import NotificationProvider
from sms_notify.application.notifications.pushover import PushoverPushProvider
from sms_notify.application.notifications.twilio import TwilioSmsProvider
from sms_notify.config.credentials import (
    CredentialBundle,
    EmailGatewayCredentials,
    NtfyCredentials,
    PushoverCredentials,
    TwilioCredentials,
)

__all__ = ["ProviderFactory", "build_provider"]

ProviderFactory: TypeAlias = Callable[[CredentialBundle], NotificationProvider]


def build_provider(credentials: CredentialBundle) -> NotificationProvider:
    """Construct the backend matching the credential variant."""
    match credentials:
        case PushoverCredentials():
            return PushoverPushProvider(credentials)
        case NtfyCredentials():
            return NtfyPushProvider(credentials)
        case TwilioCredentials():
            return TwilioSmsProvider(credentials)
        case EmailGatewayCredentials():
            return EmailGatewaySmsProvider(credentials)
        case _:
            assert_never(credentials)
