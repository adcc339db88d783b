"""Process exit codes and the ErrorKind → exit code mapping."""

from __future__ import annotations

from enum import IntEnum

from sms_notify.kernel.errors.base import ErrorKind


class ExitCode(IntEnum):
    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_ARGUMENTS = 2
    CONFIG_ERROR = 3
    VALIDATION_ERROR = 4
    NETWORK_ERROR = 5


_KIND_TO_EXIT: dict[ErrorKind, ExitCode] = {
    ErrorKind.INVALID_PHONE: ExitCode.VALIDATION_ERROR,
    ErrorKind.MISSING_CONFIG: ExitCode.CONFIG_ERROR,
    ErrorKind.AUTH_FAILED: ExitCode.CONFIG_ERROR,
    ErrorKind.NETWORK_ERROR: ExitCode.NETWORK_ERROR,
    ErrorKind.PROVIDER_ERROR: ExitCode.NETWORK_ERROR,
    ErrorKind.RATE_LIMITED: ExitCode.NETWORK_ERROR,
}


def exit_code_for(kind: ErrorKind | str | None) -> ExitCode:
    """Return the exit code for *kind*; unclassified failures map to ``GENERAL_ERROR``."""
    if kind is None:
        return ExitCode.GENERAL_ERROR
    try:
        return _KIND_TO_EXIT[ErrorKind(kind)]
    except (KeyError, ValueError):
        return ExitCode.GENERAL_ERROR


__all__ = ["ExitCode", "exit_code_for"]
