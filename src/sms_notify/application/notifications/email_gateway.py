"""Application notifications – EmailGatewaySmsProvider (requires aiosmtplib).

Sends SMS through a carrier's email-to-SMS gateway, e.g.
``4155552671@txt.att.net``.
"""
from __future__ import annotations

from email.message import EmailMessage
from email.utils import make_msgid

import aiosmtplib
import phonenumbers
from phonenumbers import NumberParseException

from sms_notify.application.notifications.outcome import SendOutcome, utcnow
from sms_notify.application.notifications.provider import network_error, record_failure
from sms_notify.config.credentials import EmailGatewayCredentials
from sms_notify.kernel.errors import ErrorDetail, ErrorKind
from sms_notify.observability.logging import get_logger, mask_destination

__all__ = ["EmailGatewaySmsProvider", "gateway_address", "map_smtp_error"]

logger = get_logger(__name__)

_NETWORK_ERRORS = (
    aiosmtplib.SMTPConnectError,
    aiosmtplib.SMTPConnectTimeoutError,
    aiosmtplib.SMTPTimeoutError,
    aiosmtplib.SMTPServerDisconnected,
    OSError,
)


def gateway_address(destination: str, domain: str) -> str:
    """Return ``<national number>@<domain>`` for an E.164 *destination*."""
    parsed = phonenumbers.parse(destination, None)
    return f"{phonenumbers.national_significant_number(parsed)}@{domain}"


def map_smtp_error(exc: Exception) -> ErrorDetail:
    if isinstance(exc, aiosmtplib.SMTPAuthenticationError):
        return ErrorDetail(
            kind=ErrorKind.AUTH_FAILED,
            message="Email authentication failed",
            guidance="Your email credentials are invalid. Check EMAIL_USER and EMAIL_PASS in your .env file.",
        )
    if isinstance(exc, (aiosmtplib.SMTPRecipientsRefused, aiosmtplib.SMTPRecipientRefused)):
        return ErrorDetail(
            kind=ErrorKind.INVALID_PHONE,
            message="The carrier gateway refused the recipient address",
            guidance="Check the phone number and that SMS_CARRIER matches the recipient's carrier.",
        )
    if isinstance(exc, _NETWORK_ERRORS):
        error = network_error("email server")
        return ErrorDetail(
            kind=error.kind,
            message=error.message,
            guidance="Check your internet connection and EMAIL_HOST setting.",
            retryable=error.retryable,
        )
    return ErrorDetail(
        kind=ErrorKind.PROVIDER_ERROR,
        message=f"Email gateway error: {exc}",
        guidance="An error occurred while sending via email gateway. Check your email settings.",
    )


class EmailGatewaySmsProvider:
    """SMS delivered as a plain-text email to the carrier gateway."""

    name = "email"

    def __init__(self, credentials: EmailGatewayCredentials) -> None:
        self._credentials = credentials

    def _build_message(self, to_address: str, body: str) -> EmailMessage:
        sender_domain = self._credentials.user.rpartition("@")[2] or None
        msg = EmailMessage()
        msg["From"] = self._credentials.user
        msg["To"] = to_address
        msg["Subject"] = ""
        msg["Message-ID"] = make_msgid(domain=sender_domain)
        msg.set_content(body)
        return msg

    async def send(self, destination: str, body: str) -> SendOutcome:
        requested_at = utcnow()
        creds = self._credentials

        try:
            to_address = gateway_address(destination, creds.gateway_domain)
        except NumberParseException:
            error = ErrorDetail(
                kind=ErrorKind.INVALID_PHONE,
                message="Invalid phone number format",
                guidance=f'The destination "{destination}" is not an E.164 phone number.',
            )
            return record_failure(self.name, destination, error, requested_at)

        message = self._build_message(to_address, body)
        logger.debug(
            "notification.send.attempt",
            provider=self.name,
            dest=mask_destination(destination),
            host=creds.host,
            port=creds.port,
        )

        try:
            await aiosmtplib.send(
                message,
                hostname=creds.host,
                port=creds.port,
                username=creds.user,
                password=creds.password,
                use_tls=creds.secure,
            )
        except (aiosmtplib.SMTPException, OSError) as exc:
            return record_failure(self.name, destination, map_smtp_error(exc), requested_at)

        message_id = message["Message-ID"]
        logger.debug("notification.send.accepted", provider=self.name, message_id=message_id)
        return SendOutcome.delivered(destination, message_id, requested_at)
