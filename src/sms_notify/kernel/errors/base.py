"""Error taxonomy – ErrorKind, ErrorDetail and the NotifyError exception."""

from __future__ import annotations

import dataclasses
import json
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Closed set of failure categories."""

    INVALID_PHONE = "INVALID_PHONE"
    MISSING_CONFIG = "MISSING_CONFIG"
    AUTH_FAILED = "AUTH_FAILED"
    NETWORK_ERROR = "NETWORK_ERROR"
    PROVIDER_ERROR = "PROVIDER_ERROR"
    RATE_LIMITED = "RATE_LIMITED"


@dataclasses.dataclass(frozen=True, slots=True)
class ErrorDetail:
    """A failure passed by value up the call chain.

    Args:
        kind: Failure category, drives the exit code.
        message: One-line summary shown to the user.
        guidance: Concrete remediation steps.
        retryable: Hint for callers that wrap the core in retry logic.
    """

    kind: ErrorKind
    message: str
    guidance: str = ""
    retryable: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict (safe for logging)."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "retryable": self.retryable,
            "guidance": self.guidance,
        }

    def to_exception(self) -> "NotifyError":
        return NotifyError(self)


class BaseError(Exception):
    """Root of the error hierarchy.

    Args:
        message: Human-readable description.
        code: Machine-readable slug.
        detail: Arbitrary extra context (serialisable dict).
        cause: Original exception that triggered this error.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        """Return a JSON-serialisable single-line string representation."""
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


class NotifyError(BaseError):
    """Exception carrying an :class:`ErrorDetail`.

    Raised only where a value-level failure must cross an exception
    boundary, e.g. ``Err.unwrap()``.
    """

    default_code = "notify_error"

    def __init__(self, error: ErrorDetail, *, cause: BaseException | None = None) -> None:
        super().__init__(
            error.message,
            code=error.kind.value,
            detail={"retryable": error.retryable, "guidance": error.guidance},
            cause=cause,
        )
        self.error = error

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind


__all__ = ["BaseError", "ErrorDetail", "ErrorKind", "NotifyError"]
