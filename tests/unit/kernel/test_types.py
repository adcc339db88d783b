"""Unit tests for kernel types – Result, phone normalization, encoding analysis."""

from __future__ import annotations

import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from sms_notify.kernel.errors import ErrorDetail, ErrorKind, NotifyError
from sms_notify.kernel.types import (
    Encoding,
    Err,
    NormalizedPhoneNumber,
    Ok,
    analyze,
    detect_encoding,
    normalize,
    sanitize,
)
from sms_notify.kernel.types.encoding import GSM7_BASIC_CHARS, GSM7_EXTENDED_CHARS

_BASIC = sorted(GSM7_BASIC_CHARS)
_EXTENDED = sorted(GSM7_EXTENDED_CHARS)
_GSM7_ALL = _BASIC + _EXTENDED


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


class TestResult:
    def test_ok(self) -> None:
        r = Ok(42)
        assert r.is_ok() and not r.is_err()
        assert r.unwrap() == 42
        assert r.map(lambda v: v + 1).unwrap() == 43

    def test_err_unwrap_raises_notify_error_for_detail(self) -> None:
        detail = ErrorDetail(kind=ErrorKind.MISSING_CONFIG, message="m")
        r = Err(detail)
        assert r.is_err()
        with pytest.raises(NotifyError) as info:
            r.unwrap()
        assert info.value.error is detail

    def test_err_unwrap_reraises_exception(self) -> None:
        with pytest.raises(KeyError):
            Err(KeyError("k")).unwrap()

    def test_err_unwrap_or(self) -> None:
        assert Err("x").unwrap_or(7) == 7

    def test_err_map_is_noop(self) -> None:
        r = Err("x")
        assert r.map(lambda v: v) is r

    def test_flat_map(self) -> None:
        assert Ok(2).flat_map(lambda v: Ok(v * 3)) == Ok(6)
        assert Ok(2).flat_map(lambda v: Err("no")) == Err("no")

    def test_pattern_matching(self) -> None:
        match Ok("v"):
            case Ok(value):
                assert value == "v"
            case _:
                pytest.fail("expected Ok")


# ---------------------------------------------------------------------------
# Phone normalization
# ---------------------------------------------------------------------------


class TestSanitize:
    def test_strips_formatting(self) -> None:
        assert sanitize(" (415) 555-2671 ") == "4155552671"

    def test_strips_periods_and_spaces(self) -> None:
        assert sanitize("415.555.2671") == "4155552671"
        assert sanitize("415 555 2671") == "4155552671"

    def test_keeps_leading_plus(self) -> None:
        assert sanitize("+1 (415) 555-2671") == "+14155552671"

    def test_keeps_plus_after_whitespace(self) -> None:
        assert sanitize("   +44 7700 900123") == "+447700900123"


class TestNormalize:
    def test_us_national_number(self) -> None:
        result = normalize("415-555-2671", "US")
        assert result.is_ok()
        phone = result.value
        assert phone.canonical == "+14155552671"
        assert phone.region_code == "US"
        assert phone.raw == "415-555-2671"

    def test_default_region_is_us(self) -> None:
        assert normalize("(415) 555-2671").value.canonical == "+14155552671"

    def test_e164_is_idempotent(self) -> None:
        first = normalize("+14155552671", "US").value
        second = normalize(first.canonical, "US").value
        assert second.canonical == first.canonical == "+14155552671"

    def test_e164_ignores_default_region(self) -> None:
        assert normalize("+14155552671", "GB").value.canonical == "+14155552671"

    def test_gb_national_number(self) -> None:
        phone = normalize("07700 900123", "GB").value
        assert phone.canonical == "+447700900123"
        assert phone.region_code == "GB"

    def test_lowercase_region_accepted(self) -> None:
        assert normalize("07700900123", "gb").value.canonical == "+447700900123"

    def test_not_a_number(self) -> None:
        result = normalize("not-a-number", "US")
        assert result.is_err()
        err = result.error
        assert err.kind is ErrorKind.INVALID_PHONE
        assert err.retryable is False
        assert '"not-a-number"' in err.guidance
        assert "+14155552671" in err.guidance

    def test_empty_input(self) -> None:
        assert normalize("   ", "US").error.kind is ErrorKind.INVALID_PHONE

    def test_too_short_for_region(self) -> None:
        result = normalize("+1415", "US")
        assert result.is_err()
        assert result.error.kind is ErrorKind.INVALID_PHONE

    def test_invalid_length_guidance(self) -> None:
        result = normalize("+1415555267199", "US")
        assert result.is_err()
        assert "invalid length for the detected country" in result.error.guidance

    @pytest.mark.parametrize("local_only", ["555-2671", "5552671"])
    def test_rejects_local_only_number(self, local_only: str) -> None:
        result = normalize(local_only, "US")
        assert result.is_err()
        assert result.error.kind is ErrorKind.INVALID_PHONE
        assert result.error.message == "Phone number has invalid length"

    def test_normalized_number_is_immutable(self) -> None:
        phone = normalize("+14155552671").value
        with pytest.raises(Exception):
            phone.canonical = "+1"  # type: ignore[misc]

    def test_rejects_non_e164_canonical(self) -> None:
        with pytest.raises(NotifyError):
            NormalizedPhoneNumber(raw="x", canonical="4155552671")

    @given(st.from_regex(r"\+1[2-9]\d{2}[2-9]\d{6}", fullmatch=True))
    def test_normalize_idempotent_for_nanp(self, number: str) -> None:
        first = normalize(number, "US")
        if first.is_ok():
            canonical = first.value.canonical
            assert canonical.startswith("+") and canonical[1:].isdigit()
            assert normalize(canonical, "US").value.canonical == canonical


# ---------------------------------------------------------------------------
# Encoding analysis
# ---------------------------------------------------------------------------


class TestEncoding:
    def test_plain_ascii_is_gsm7(self) -> None:
        info = analyze("Hello world")
        assert info.encoding is Encoding.GSM_7
        assert info.segment_count == 1
        assert info.effective_char_count == 11

    def test_empty_message(self) -> None:
        info = analyze("")
        assert info.encoding is Encoding.GSM_7
        assert info.segment_count == 1
        assert info.effective_char_count == 0

    def test_extended_chars_count_twice(self) -> None:
        info = analyze("{€}")
        assert info.encoding is Encoding.GSM_7
        assert info.effective_char_count == 6

    def test_emoji_is_ucs2(self) -> None:
        info = analyze("Hi 👋")
        assert info.encoding is Encoding.UCS_2
        assert info.effective_char_count == 4

    def test_non_latin_is_ucs2(self) -> None:
        assert detect_encoding("Привет") is Encoding.UCS_2

    def test_greek_capitals_are_gsm7(self) -> None:
        assert detect_encoding("ΔΦΓΛΩΠΨΣΘΞ") is Encoding.GSM_7

    def test_gsm7_single_segment_boundary(self) -> None:
        assert analyze("a" * 160).segment_count == 1
        assert analyze("a" * 161).segment_count == 2
        assert analyze("a" * 306).segment_count == 2
        assert analyze("a" * 307).segment_count == 3

    def test_extended_chars_push_over_boundary(self) -> None:
        info = analyze("a" * 159 + "^")
        assert info.effective_char_count == 161
        assert info.segment_count == 2

    def test_ucs2_boundaries(self) -> None:
        assert analyze("ж" * 70).segment_count == 1
        assert analyze("ж" * 71).segment_count == 2
        assert analyze("ж" * 135).segment_count == 3

    def test_ucs2_counts_code_points(self) -> None:
        # Each emoji is one code point but two UTF-16 units.
        assert analyze("😀" * 70).segment_count == 1

    def test_is_multipart(self) -> None:
        assert analyze("a" * 200).is_multipart
        assert not analyze("a").is_multipart

    @given(st.text(alphabet=_BASIC))
    def test_basic_alphabet_is_always_gsm7(self, text: str) -> None:
        info = analyze(text)
        assert info.encoding is Encoding.GSM_7
        assert info.effective_char_count == len(text)

    @given(
        st.text(alphabet=_GSM7_ALL),
        st.characters().filter(lambda c: c not in GSM7_BASIC_CHARS and c not in GSM7_EXTENDED_CHARS),
        st.text(alphabet=_GSM7_ALL),
    )
    def test_any_foreign_char_forces_ucs2(self, prefix: str, foreign: str, suffix: str) -> None:
        assert analyze(prefix + foreign + suffix).encoding is Encoding.UCS_2

    @given(st.text(alphabet=_GSM7_ALL, max_size=600))
    def test_gsm7_segment_formula(self, text: str) -> None:
        info = analyze(text)
        n = info.effective_char_count
        expected = 1 if n <= 160 else math.ceil(n / 153)
        assert info.segment_count == expected
        assert info.segment_count >= 1
