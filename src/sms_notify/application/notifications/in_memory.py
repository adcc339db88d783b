"""Application notifications – InMemoryProvider fake."""
from __future__ import annotations

from sms_notify.application.notifications.outcome import SendOutcome, utcnow
from sms_notify.kernel.errors import ErrorDetail

__all__ = ["InMemoryProvider"]


class InMemoryProvider:
    """Fake NotificationProvider that captures sends in memory.

    Returns a successful outcome unless constructed with *error*.
    """

    def __init__(self, name: str = "memory", error: ErrorDetail | None = None) -> None:
        self.name = name
        self.error = error
        self.sent: list[tuple[str, str]] = []

    async def send(self, destination: str, body: str) -> SendOutcome:
        requested_at = utcnow()
        self.sent.append((destination, body))
        if self.error is not None:
            return SendOutcome.failed(destination, self.error, requested_at)
        return SendOutcome.delivered(destination, f"mem-{self.name}-{len(self.sent)}", requested_at)

    def reset(self) -> None:
        self.sent.clear()

    @property
    def count(self) -> int:
        return len(self.sent)

    def last(self) -> tuple[str, str] | None:
        return self.sent[-1] if self.sent else None
