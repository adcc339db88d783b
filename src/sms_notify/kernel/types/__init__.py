"""Kernel value-object types – public re-export surface.

Modules:
  result.py   – Ok, Err, Result
  phone.py    – NormalizedPhoneNumber, normalize, sanitize
  encoding.py – Encoding, MessageEncodingInfo, analyze
"""

from sms_notify.kernel.types.encoding import (
    Encoding,
    MessageEncodingInfo,
    analyze,
    detect_encoding,
)
from sms_notify.kernel.types.phone import (
    DEFAULT_REGION,
    NormalizedPhoneNumber,
    normalize,
    sanitize,
)
from sms_notify.kernel.types.result import Err, Ok, Result

__all__ = [
    "DEFAULT_REGION",
    "Encoding",
    "Err",
    "MessageEncodingInfo",
    "NormalizedPhoneNumber",
    "Ok",
    "Result",
    "analyze",
    "detect_encoding",
    "normalize",
    "sanitize",
]
