"""Kernel error taxonomy – public re-export surface.

Hierarchy::

    ErrorKind            closed failure-category enum
    ErrorDetail          value object returned across component boundaries
    BaseError            exception root
    └── NotifyError      wraps an ErrorDetail when it must be raised
    ExitCode             process exit statuses (exit_codes.py)
"""

from sms_notify.kernel.errors.base import BaseError, ErrorDetail, ErrorKind, NotifyError
from sms_notify.kernel.errors.exit_codes import ExitCode, exit_code_for

__all__ = [
    "BaseError",
    "ErrorDetail",
    "ErrorKind",
    "ExitCode",
    "NotifyError",
    "exit_code_for",
]
