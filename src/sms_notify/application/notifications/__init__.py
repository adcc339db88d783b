"""Application notifications – provider port, backends and fakes."""
from sms_notify.application.notifications.email_gateway import EmailGatewaySmsProvider
from sms_notify.application.notifications.factory import ProviderFactory, build_provider
from sms_notify.application.notifications.in_memory import InMemoryProvider
from sms_notify.application.notifications.ntfy import NtfyPushProvider
from sms_notify.application.notifications.outcome import SendOutcome
from sms_notify.application.notifications.provider import NotificationProvider
from sms_notify.application.notifications.pushover import PushoverPushProvider
from sms_notify.application.notifications.twilio import TwilioSmsProvider

__all__ = [
    "EmailGatewaySmsProvider",
    "InMemoryProvider",
    "NotificationProvider",
    "NtfyPushProvider",
    "ProviderFactory",
    "PushoverPushProvider",
    "SendOutcome",
    "TwilioSmsProvider",
    "build_provider",
]
