"""Application notifications – TwilioSmsProvider (Twilio REST API over httpx)."""
from __future__ import annotations

from typing import Any, Final

import httpx

from sms_notify.application.notifications.outcome import SendOutcome, utcnow
from sms_notify.application.notifications.provider import (
    json_body,
    record_failure,
    transport_error,
)
from sms_notify.config.credentials import TwilioCredentials
from sms_notify.kernel.errors import ErrorDetail, ErrorKind
from sms_notify.observability.logging import get_logger, mask_destination

__all__ = ["TWILIO_API_URL", "TwilioSmsProvider", "map_twilio_error"]

logger = get_logger(__name__)

TWILIO_API_URL: Final = "https://api.twilio.com/2010-04-01/Accounts/{account_sid}/Messages.json"

# https://www.twilio.com/docs/api/errors
_AUTH_FAILED_CODES: Final = frozenset({20003})
_RATE_LIMITED_CODES: Final = frozenset({20429})
_INVALID_PHONE_CODES: Final = frozenset({21211, 21614})


def map_twilio_error(status_code: int, payload: dict[str, Any], text: str = "") -> ErrorDetail:
    """Map a non-2xx Twilio response onto the shared ErrorKind taxonomy."""
    code = payload.get("code")
    message = payload.get("message") or text or f"HTTP {status_code}"

    if code in _AUTH_FAILED_CODES or status_code == 401:
        return ErrorDetail(
            kind=ErrorKind.AUTH_FAILED,
            message="Authentication failed",
            guidance=(
                "Your Twilio credentials are invalid. Please verify your TWILIO_ACCOUNT_SID "
                "and TWILIO_AUTH_TOKEN at https://console.twilio.com"
            ),
        )
    if code in _RATE_LIMITED_CODES or status_code == 429:
        return ErrorDetail(
            kind=ErrorKind.RATE_LIMITED,
            message="Too many requests",
            guidance="You have exceeded the rate limit. Please wait a moment and try again.",
            retryable=True,
        )
    if code in _INVALID_PHONE_CODES:
        return ErrorDetail(
            kind=ErrorKind.INVALID_PHONE,
            message=message,
            guidance=(
                "The destination phone number is invalid or cannot receive SMS. "
                "Please check the number and try again."
            ),
        )
    return ErrorDetail(
        kind=ErrorKind.PROVIDER_ERROR,
        message=f"SMS provider error: {message}",
        guidance="An error occurred while sending the SMS. Please try again or contact support.",
    )


class TwilioSmsProvider:
    """Carrier SMS through the Twilio Messages resource."""

    name = "twilio"

    def __init__(self, credentials: TwilioCredentials, *, client: httpx.AsyncClient | None = None) -> None:
        self._credentials = credentials
        self._client = client

    @property
    def url(self) -> str:
        return TWILIO_API_URL.format(account_sid=self._credentials.account_sid)

    async def _post(self, client: httpx.AsyncClient, destination: str, body: str) -> httpx.Response:
        return await client.post(
            self.url,
            data={"To": destination, "From": self._credentials.from_number, "Body": body},
            auth=(self._credentials.account_sid, self._credentials.auth_token),
        )

    async def send(self, destination: str, body: str) -> SendOutcome:
        requested_at = utcnow()
        logger.debug("notification.send.attempt", provider=self.name, dest=mask_destination(destination))

        try:
            if self._client is not None:
                response = await self._post(self._client, destination, body)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._post(client, destination, body)
        except httpx.HTTPError as exc:
            return record_failure(self.name, destination, transport_error("Twilio", exc), requested_at)

        payload = json_body(response)
        if not response.is_success:
            error = map_twilio_error(response.status_code, payload, response.text)
            return record_failure(self.name, destination, error, requested_at)

        sid = payload.get("sid")
        if not sid:
            error = ErrorDetail(
                kind=ErrorKind.PROVIDER_ERROR,
                message="SMS provider error: response did not include a message SID",
                guidance="An error occurred while sending the SMS. Please try again or contact support.",
            )
            return record_failure(self.name, destination, error, requested_at)

        logger.debug("notification.send.accepted", provider=self.name, message_id=sid)
        return SendOutcome.delivered(destination, str(sid), requested_at)
