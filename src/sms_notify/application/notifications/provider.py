"""Application notifications – provider protocol and shared transport helpers."""
from __future__ import annotations

import datetime
from typing import Any, Protocol, runtime_checkable

import httpx

from sms_notify.application.notifications.outcome import SendOutcome
from sms_notify.kernel.errors import ErrorDetail, ErrorKind
from sms_notify.observability.logging import get_logger, mask_destination

__all__ = [
    "NotificationProvider",
    "json_body",
    "network_error",
    "record_failure",
    "transport_error",
]

logger = get_logger(__name__)


@runtime_checkable
class NotificationProvider(Protocol):
    """Port: deliver one message through one backend.

    ``send`` performs exactly one network call and never raises; failures
    come back as a failed :class:`SendOutcome`.
    """

    name: str

    async def send(self, destination: str, body: str) -> SendOutcome: ...


def network_error(service: str) -> ErrorDetail:
    return ErrorDetail(
        kind=ErrorKind.NETWORK_ERROR,
        message=f"Could not connect to {service}",
        guidance="Check your internet connection and try again.",
        retryable=True,
    )


def transport_error(service: str, exc: httpx.HTTPError) -> ErrorDetail:
    """Classify an httpx exception raised before any response arrived."""
    if isinstance(exc, (httpx.NetworkError, httpx.TimeoutException)):
        return network_error(service)
    return ErrorDetail(
        kind=ErrorKind.PROVIDER_ERROR,
        message=f"{service} error: {exc}",
        guidance="An error occurred while sending the notification.",
    )


def json_body(response: httpx.Response) -> dict[str, Any]:
    """Decode a JSON object body, or ``{}`` when the body is not one."""
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def record_failure(
    provider: str,
    destination: str,
    error: ErrorDetail,
    requested_at: datetime.datetime,
) -> SendOutcome:
    logger.info(
        "notification.send.failed",
        provider=provider,
        dest=mask_destination(destination),
        kind=error.kind.value,
        retryable=error.retryable,
        error=error.message,
    )
    return SendOutcome.failed(destination, error, requested_at)
