"""Phone number normalization – raw user input to E.164.

Parsing and length plausibility are delegated to ``phonenumbers``
(the Python port of Google's libphonenumber).
"""

from __future__ import annotations

import dataclasses
import re
from typing import Final

import phonenumbers
from phonenumbers import NumberParseException, PhoneNumberFormat, ValidationResult

from sms_notify.kernel.errors.base import ErrorDetail, ErrorKind, NotifyError
from sms_notify.kernel.types.result import Err, Ok, Result

DEFAULT_REGION: Final = "US"
EXAMPLE_E164: Final = "+14155552671"

_E164_PATTERN: Final = re.compile(r"^\+\d+$")
_FORMATTING_CHARS: Final = re.compile(r"[\s\-().]")

_UNPARSEABLE_GUIDANCE: Final = (
    'The phone number "{raw}" could not be parsed. Please provide a valid phone number '
    "in E.164 format (e.g., {example}) or national format with --country flag."
)
_BAD_LENGTH_GUIDANCE: Final = (
    'The phone number "{raw}" has an invalid length for the detected country. '
    "Please check the number and try again."
)


@dataclasses.dataclass(frozen=True, slots=True)
class NormalizedPhoneNumber:
    """A validated destination number.

    ``canonical`` is E.164: a ``+`` followed by digits only.
    """

    raw: str
    canonical: str
    region_code: str | None = None

    def __post_init__(self) -> None:
        if not _E164_PATTERN.match(self.canonical):
            raise NotifyError(
                ErrorDetail(
                    kind=ErrorKind.INVALID_PHONE,
                    message=f"Invalid E.164 phone number: {self.canonical!r}",
                    guidance=f"Expected a '+' followed by digits, e.g. {EXAMPLE_E164}.",
                )
            )

    def __str__(self) -> str:
        return self.canonical


def sanitize(raw: str) -> str:
    """Strip whitespace, hyphens, parentheses and periods, keeping a leading ``+``."""
    text = raw.strip()
    has_plus = text.startswith("+")
    text = _FORMATTING_CHARS.sub("", text)
    if has_plus and not text.startswith("+"):
        text = "+" + text
    return text


def _invalid(raw: str, message: str, template: str) -> Err[ErrorDetail]:
    return Err(
        ErrorDetail(
            kind=ErrorKind.INVALID_PHONE,
            message=message,
            guidance=template.format(raw=raw, example=EXAMPLE_E164),
            retryable=False,
        )
    )


def normalize(raw: str, default_region: str | None = DEFAULT_REGION) -> Result[NormalizedPhoneNumber, ErrorDetail]:
    """Parse *raw* into a :class:`NormalizedPhoneNumber`.

    *default_region* is the ISO 3166-1 alpha-2 region assumed for input
    without a leading ``+``. Numbers that parse but are not a possible
    length for their region are rejected.
    """
    region = (default_region or DEFAULT_REGION).upper()
    sanitized = sanitize(raw)

    try:
        parsed = phonenumbers.parse(sanitized, region)
    except NumberParseException:
        return _invalid(raw, "Could not parse phone number", _UNPARSEABLE_GUIDANCE)

    # IS_POSSIBLE_LOCAL_ONLY numbers lack an area code and have no E.164 form
    if phonenumbers.is_possible_number_with_reason(parsed) != ValidationResult.IS_POSSIBLE:
        return _invalid(raw, "Phone number has invalid length", _BAD_LENGTH_GUIDANCE)

    return Ok(
        NormalizedPhoneNumber(
            raw=raw,
            canonical=phonenumbers.format_number(parsed, PhoneNumberFormat.E164),
            region_code=_region_of(parsed),
        )
    )


def _region_of(parsed: phonenumbers.PhoneNumber) -> str | None:
    # Falls back to the main region of the calling code when the number
    # matches no region-specific pattern (e.g. fictional 555 numbers).
    region = phonenumbers.region_code_for_number(parsed)
    if region is None:
        region = phonenumbers.region_code_for_country_code(parsed.country_code)
    if region in (None, phonenumbers.UNKNOWN_REGION, "001"):
        return None
    return region


__all__ = ["DEFAULT_REGION", "NormalizedPhoneNumber", "normalize", "sanitize"]
