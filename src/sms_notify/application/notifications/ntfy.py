"""Application notifications – NtfyPushProvider (ntfy.sh topic push)."""
from __future__ import annotations

from typing import Final

import httpx

from sms_notify.application.notifications.outcome import SendOutcome, utcnow
from sms_notify.application.notifications.provider import (
    json_body,
    record_failure,
    transport_error,
)
from sms_notify.config.credentials import NtfyCredentials
from sms_notify.kernel.errors import ErrorDetail, ErrorKind
from sms_notify.observability.logging import get_logger

__all__ = ["NtfyPushProvider", "map_ntfy_error"]

logger = get_logger(__name__)

NTFY_HEADERS: Final = {"Title": "notify", "Tags": "speech_balloon"}


def map_ntfy_error(status_code: int, text: str) -> ErrorDetail:
    if status_code == 429:
        return ErrorDetail(
            kind=ErrorKind.RATE_LIMITED,
            message="Too many requests to ntfy.sh",
            guidance="You have exceeded the rate limit. Wait a moment and try again.",
            retryable=True,
        )
    if status_code in (401, 403):
        return ErrorDetail(
            kind=ErrorKind.AUTH_FAILED,
            message=f"ntfy.sh rejected the request ({status_code})",
            guidance=(
                "The topic is protected on this server. Choose another NTFY_TOPIC "
                "or point NTFY_SERVER at a server you can publish to."
            ),
        )
    return ErrorDetail(
        kind=ErrorKind.PROVIDER_ERROR,
        message=f"ntfy.sh error ({status_code}): {text.strip()}",
        guidance="Check your NTFY_TOPIC setting and try again.",
    )


class NtfyPushProvider:
    """Push notification published to an ntfy topic.

    The destination is not used for delivery; every subscriber of the
    topic receives the message.
    """

    name = "ntfy"

    def __init__(self, credentials: NtfyCredentials, *, client: httpx.AsyncClient | None = None) -> None:
        self._credentials = credentials
        self._client = client

    async def _post(self, client: httpx.AsyncClient, body: str) -> httpx.Response:
        return await client.post(self._credentials.url, content=body.encode("utf-8"), headers=NTFY_HEADERS)

    async def send(self, destination: str, body: str) -> SendOutcome:
        requested_at = utcnow()
        logger.debug("notification.send.attempt", provider=self.name, topic=self._credentials.topic)

        try:
            if self._client is not None:
                response = await self._post(self._client, body)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._post(client, body)
        except httpx.HTTPError as exc:
            return record_failure(self.name, destination, transport_error("ntfy.sh", exc), requested_at)

        if not response.is_success:
            error = map_ntfy_error(response.status_code, response.text)
            return record_failure(self.name, destination, error, requested_at)

        message_id = json_body(response).get("id")
        if not message_id:
            error = ErrorDetail(
                kind=ErrorKind.PROVIDER_ERROR,
                message="ntfy.sh error: response did not include a message id",
                guidance="Check that NTFY_SERVER points at an ntfy server.",
            )
            return record_failure(self.name, destination, error, requested_at)

        logger.debug("notification.send.accepted", provider=self.name, message_id=message_id)
        return SendOutcome.delivered(destination, str(message_id), requested_at)
