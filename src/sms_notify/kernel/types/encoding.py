"""Message encoding analysis – GSM-7 vs UCS-2 and SMS segment estimation."""

from __future__ import annotations

import dataclasses
import math
from enum import Enum
from typing import Final


class Encoding(str, Enum):
    GSM_7 = "GSM-7"
    UCS_2 = "UCS-2"


# Characters encodable in the GSM 03.38 default alphabet (one septet each).
GSM7_BASIC_CHARS: Final = frozenset(
    "@£$¥èéùìòÇ\nØø\rÅå"
    "Δ_ΦΓΛΩΠΨΣΘΞÆæßÉ"
    " !\"#¤%&'()*+,-./"
    "0123456789:;<=>?"
    "¡ABCDEFGHIJKLMNO"
    "PQRSTUVWXYZÄÖÑÜ§"
    "¿abcdefghijklmno"
    "pqrstuvwxyzäöñüà"
)

# Extension table characters; each needs an escape septet, so counts as two.
GSM7_EXTENDED_CHARS: Final = frozenset("|^€{}[]~\\")

SINGLE_SEGMENT_LIMIT: Final = {Encoding.GSM_7: 160, Encoding.UCS_2: 70}
MULTI_SEGMENT_LIMIT: Final = {Encoding.GSM_7: 153, Encoding.UCS_2: 67}


@dataclasses.dataclass(frozen=True, slots=True)
class MessageEncodingInfo:
    encoding: Encoding
    segment_count: int
    effective_char_count: int

    @property
    def is_multipart(self) -> bool:
        return self.segment_count > 1


def detect_encoding(text: str) -> Encoding:
    """Return ``GSM_7`` when every character is in the GSM-7 alphabet, else ``UCS_2``."""
    for char in text:
        if char not in GSM7_BASIC_CHARS and char not in GSM7_EXTENDED_CHARS:
            return Encoding.UCS_2
    return Encoding.GSM_7


def analyze(text: str) -> MessageEncodingInfo:
    """Classify *text* and estimate how many SMS segments it occupies.

    Under GSM-7, extended characters count as two. Under UCS-2 the count
    is the number of code points.
    """
    encoding = detect_encoding(text)
    if encoding is Encoding.GSM_7:
        char_count = sum(2 if char in GSM7_EXTENDED_CHARS else 1 for char in text)
    else:
        char_count = len(text)

    if char_count <= SINGLE_SEGMENT_LIMIT[encoding]:
        segments = 1
    else:
        segments = math.ceil(char_count / MULTI_SEGMENT_LIMIT[encoding])

    return MessageEncodingInfo(
        encoding=encoding,
        segment_count=segments,
        effective_char_count=char_count,
    )


__all__ = [
    "GSM7_BASIC_CHARS",
    "GSM7_EXTENDED_CHARS",
    "Encoding",
    "MessageEncodingInfo",
    "analyze",
    "detect_encoding",
]
