"""Application notifications – PushoverPushProvider."""
from __future__ import annotations

from typing import Any, Final

import httpx

from sms_notify.application.notifications.outcome import SendOutcome, utcnow
from sms_notify.application.notifications.provider import (
    json_body,
    record_failure,
    transport_error,
)
from sms_notify.config.credentials import PushoverCredentials
from sms_notify.kernel.errors import ErrorDetail, ErrorKind
from sms_notify.observability.logging import get_logger

__all__ = ["PUSHOVER_API_URL", "PushoverPushProvider", "map_pushover_error"]

logger = get_logger(__name__)

PUSHOVER_API_URL: Final = "https://api.pushover.net/1/messages.json"
PUSHOVER_TITLE: Final = "notify"


def map_pushover_error(status_code: int, payload: dict[str, Any]) -> ErrorDetail:
    """Map a rejected Pushover request.

    Pushover marks bad credentials by setting ``token`` or ``user`` to
    ``"invalid"`` in the response body.
    """
    if status_code == 429:
        return ErrorDetail(
            kind=ErrorKind.RATE_LIMITED,
            message="Pushover message limit reached",
            guidance="Your application has exceeded its monthly message limit or is sending too fast. Try again later.",
            retryable=True,
        )
    errors = payload.get("errors") or []
    detail = ", ".join(str(e) for e in errors) or f"HTTP {status_code}"
    if payload.get("token") == "invalid" or payload.get("user") == "invalid":
        return ErrorDetail(
            kind=ErrorKind.AUTH_FAILED,
            message=f"Pushover authentication failed: {detail}",
            guidance="Check your PUSHOVER_USER and PUSHOVER_TOKEN settings at https://pushover.net",
        )
    return ErrorDetail(
        kind=ErrorKind.PROVIDER_ERROR,
        message=f"Pushover error: {detail}",
        guidance="Check your PUSHOVER_USER and PUSHOVER_TOKEN settings.",
    )


class PushoverPushProvider:
    """Push notification to every device registered to a Pushover user key."""

    name = "pushover"

    def __init__(self, credentials: PushoverCredentials, *, client: httpx.AsyncClient | None = None) -> None:
        self._credentials = credentials
        self._client = client

    def _payload(self, body: str) -> dict[str, str]:
        return {
            "token": self._credentials.api_token,
            "user": self._credentials.user_key,
            "message": body,
            "title": PUSHOVER_TITLE,
        }

    async def _post(self, client: httpx.AsyncClient, body: str) -> httpx.Response:
        return await client.post(PUSHOVER_API_URL, json=self._payload(body))

    async def send(self, destination: str, body: str) -> SendOutcome:
        requested_at = utcnow()
        logger.debug("notification.send.attempt", provider=self.name)

        try:
            if self._client is not None:
                response = await self._post(self._client, body)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._post(client, body)
        except httpx.HTTPError as exc:
            return record_failure(self.name, destination, transport_error("Pushover", exc), requested_at)

        payload = json_body(response)
        if not response.is_success or payload.get("status") != 1 or not payload.get("request"):
            error = map_pushover_error(response.status_code, payload)
            return record_failure(self.name, destination, error, requested_at)

        request_id = str(payload["request"])
        logger.debug("notification.send.accepted", provider=self.name, message_id=request_id)
        return SendOutcome.delivered(destination, request_id, requested_at)
