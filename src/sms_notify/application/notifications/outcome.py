"""Application notifications – SendOutcome value object."""
from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Any

from sms_notify.kernel.errors import ErrorDetail

__all__ = ["SendOutcome", "utcnow"]


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


@dataclass(frozen=True, slots=True)
class SendOutcome:
    """The result of one send call.

    ``message_id`` is present iff ``success``; ``error`` iff not.
    ``requested_at`` is captured before the network call.
    """

    success: bool
    destination: str
    requested_at: datetime.datetime
    message_id: str | None = None
    error: ErrorDetail | None = None

    def __post_init__(self) -> None:
        if self.success and (not self.message_id or self.error is not None):
            raise ValueError("successful outcome requires a message_id and no error")
        if not self.success and (self.error is None or self.message_id is not None):
            raise ValueError("failed outcome requires an error and no message_id")

    @classmethod
    def delivered(
        cls, destination: str, message_id: str, requested_at: datetime.datetime
    ) -> "SendOutcome":
        return cls(success=True, destination=destination, requested_at=requested_at, message_id=message_id)

    @classmethod
    def failed(
        cls, destination: str, error: ErrorDetail, requested_at: datetime.datetime
    ) -> "SendOutcome":
        return cls(success=False, destination=destination, requested_at=requested_at, error=error)

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "destination": self.destination,
            "requested_at": self.requested_at.isoformat(),
            "message_id": self.message_id,
            "error": self.error.to_dict() if self.error else None,
        }
