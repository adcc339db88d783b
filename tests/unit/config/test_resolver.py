"""Unit tests for provider detection and credential loading."""

from __future__ import annotations

import pytest

from sms_notify.config import (
    EmailGatewayCredentials,
    NtfyCredentials,
    ProviderKind,
    PushoverCredentials,
    TwilioCredentials,
    detect_provider,
    load_credentials,
    load_email_credentials,
    load_ntfy_credentials,
    load_pushover_credentials,
    load_twilio_credentials,
)
from sms_notify.kernel.errors import ErrorKind

PUSHOVER_ENV = {"PUSHOVER_USER": "u-key", "PUSHOVER_TOKEN": "a-token"}
NTFY_ENV = {"NTFY_TOPIC": "my-alerts"}
TWILIO_ENV = {
    "TWILIO_ACCOUNT_SID": "AC123",
    "TWILIO_AUTH_TOKEN": "tok",
    "TWILIO_PHONE_NUMBER": "+15005550006",
}
EMAIL_ENV = {"EMAIL_USER": "me@example.com", "EMAIL_PASS": "pw", "SMS_CARRIER": "att"}


# ---------------------------------------------------------------------------
# detect_provider
# ---------------------------------------------------------------------------


class TestDetectProvider:
    @pytest.mark.parametrize(
        ("env", "expected"),
        [
            (PUSHOVER_ENV, ProviderKind.PUSHOVER),
            (NTFY_ENV, ProviderKind.NTFY),
            (TWILIO_ENV, ProviderKind.TWILIO),
            (EMAIL_ENV, ProviderKind.EMAIL),
            ({}, ProviderKind.NONE),
        ],
    )
    def test_single_backend(self, env: dict[str, str], expected: ProviderKind) -> None:
        assert detect_provider(env) is expected

    @pytest.mark.parametrize(
        ("envs", "expected"),
        [
            ((PUSHOVER_ENV, NTFY_ENV), ProviderKind.PUSHOVER),
            ((NTFY_ENV, TWILIO_ENV), ProviderKind.NTFY),
            ((TWILIO_ENV, EMAIL_ENV), ProviderKind.TWILIO),
            ((EMAIL_ENV, PUSHOVER_ENV), ProviderKind.PUSHOVER),
            ((EMAIL_ENV, TWILIO_ENV, NTFY_ENV, PUSHOVER_ENV), ProviderKind.PUSHOVER),
        ],
    )
    def test_priority_order(self, envs: tuple[dict[str, str], ...], expected: ProviderKind) -> None:
        merged: dict[str, str] = {}
        for env in envs:
            merged.update(env)
        assert detect_provider(merged) is expected

    def test_empty_values_are_not_configured(self) -> None:
        assert detect_provider({"PUSHOVER_USER": "", "PUSHOVER_TOKEN": "", "NTFY_TOPIC": " "}) is ProviderKind.NONE

    def test_partial_pushover_falls_through(self) -> None:
        env = {"PUSHOVER_USER": "u", **TWILIO_ENV}
        assert detect_provider(env) is ProviderKind.TWILIO

    def test_twilio_detected_without_sender(self) -> None:
        env = {"TWILIO_ACCOUNT_SID": "AC1", "TWILIO_AUTH_TOKEN": "t"}
        assert detect_provider(env) is ProviderKind.TWILIO

    def test_push_kinds(self) -> None:
        assert ProviderKind.PUSHOVER.is_push and ProviderKind.NTFY.is_push
        assert not ProviderKind.TWILIO.is_push and not ProviderKind.EMAIL.is_push


# ---------------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------------


class TestLoadPushover:
    def test_success(self) -> None:
        creds = load_pushover_credentials(PUSHOVER_ENV).unwrap()
        assert creds == PushoverCredentials(user_key="u-key", api_token="a-token")

    def test_missing_both(self) -> None:
        err = load_pushover_credentials({}).error
        assert err.kind is ErrorKind.MISSING_CONFIG
        assert err.retryable is False
        assert "PUSHOVER_USER, PUSHOVER_TOKEN" in err.message
        assert 'export PUSHOVER_USER="your-value"' in err.guidance
        assert 'export PUSHOVER_TOKEN="your-value"' in err.guidance
        assert "https://pushover.net" in err.guidance

    def test_secrets_not_in_repr(self) -> None:
        creds = load_pushover_credentials(PUSHOVER_ENV).unwrap()
        assert "a-token" not in repr(creds)


class TestLoadNtfy:
    def test_default_server(self) -> None:
        creds = load_ntfy_credentials(NTFY_ENV).unwrap()
        assert creds == NtfyCredentials(topic="my-alerts", server="https://ntfy.sh")
        assert creds.url == "https://ntfy.sh/my-alerts"

    def test_custom_server(self) -> None:
        creds = load_ntfy_credentials({**NTFY_ENV, "NTFY_SERVER": "https://ntfy.example.com/"}).unwrap()
        assert creds.url == "https://ntfy.example.com/my-alerts"

    def test_invalid_server(self) -> None:
        err = load_ntfy_credentials({**NTFY_ENV, "NTFY_SERVER": "ntfy.example.com"}).error
        assert err.kind is ErrorKind.MISSING_CONFIG
        assert "NTFY_SERVER" in err.guidance

    def test_missing_topic(self) -> None:
        err = load_ntfy_credentials({"NTFY_SERVER": "https://ntfy.sh"}).error
        assert err.message == "Missing required environment variable: NTFY_TOPIC"
        assert "ntfy app" in err.guidance


class TestLoadTwilio:
    def test_success(self) -> None:
        creds = load_twilio_credentials(TWILIO_ENV).unwrap()
        assert isinstance(creds, TwilioCredentials)
        assert creds.from_number == "+15005550006"

    def test_loader_does_not_trust_detection(self) -> None:
        env = {"TWILIO_ACCOUNT_SID": "AC1", "TWILIO_AUTH_TOKEN": "t"}
        assert detect_provider(env) is ProviderKind.TWILIO
        err = load_twilio_credentials(env).error
        assert err.kind is ErrorKind.MISSING_CONFIG
        assert "TWILIO_PHONE_NUMBER" in err.message
        assert "TWILIO_ACCOUNT_SID" not in err.message
        assert "https://console.twilio.com" in err.guidance


class TestLoadEmail:
    def test_defaults(self) -> None:
        creds = load_email_credentials(EMAIL_ENV).unwrap()
        assert isinstance(creds, EmailGatewayCredentials)
        assert creds.host == "smtp.gmail.com"
        assert creds.port == 587
        assert creds.secure is False
        assert creds.gateway_domain == "txt.att.net"

    def test_overrides(self) -> None:
        env = {**EMAIL_ENV, "EMAIL_HOST": "smtp.example.com", "EMAIL_PORT": "465", "EMAIL_SECURE": "true"}
        creds = load_email_credentials(env).unwrap()
        assert (creds.host, creds.port, creds.secure) == ("smtp.example.com", 465, True)

    def test_carrier_case_insensitive(self) -> None:
        creds = load_email_credentials({**EMAIL_ENV, "SMS_CARRIER": "Verizon"}).unwrap()
        assert creds.gateway_domain == "vtext.com"

    def test_unknown_carrier(self) -> None:
        err = load_email_credentials({**EMAIL_ENV, "SMS_CARRIER": "acme"}).error
        assert err.kind is ErrorKind.MISSING_CONFIG
        assert "SMS_CARRIER" in err.message
        assert "tmobile" in err.guidance

    def test_bad_port(self) -> None:
        err = load_email_credentials({**EMAIL_ENV, "EMAIL_PORT": "smtp"}).error
        assert err.kind is ErrorKind.MISSING_CONFIG
        assert "EMAIL_PORT" in err.message

    def test_missing_lists_every_field(self) -> None:
        err = load_email_credentials({"EMAIL_USER": "me@example.com"}).error
        assert "EMAIL_PASS, SMS_CARRIER" in err.message
        assert "Supported carriers: att" in err.guidance


class TestLoadCredentials:
    @pytest.mark.parametrize(
        ("kind", "env", "expected_type"),
        [
            (ProviderKind.PUSHOVER, PUSHOVER_ENV, PushoverCredentials),
            (ProviderKind.NTFY, NTFY_ENV, NtfyCredentials),
            (ProviderKind.TWILIO, TWILIO_ENV, TwilioCredentials),
            (ProviderKind.EMAIL, EMAIL_ENV, EmailGatewayCredentials),
        ],
    )
    def test_dispatches_on_kind(self, kind: ProviderKind, env: dict[str, str], expected_type: type) -> None:
        assert isinstance(load_credentials(kind, env).unwrap(), expected_type)

    def test_none_is_missing_config(self) -> None:
        err = load_credentials(ProviderKind.NONE, {}).error
        assert err.kind is ErrorKind.MISSING_CONFIG
        assert err.message == "No SMS provider configured"
        for name in ("PUSHOVER_USER", "NTFY_TOPIC", "TWILIO_ACCOUNT_SID", "EMAIL_USER"):
            assert name in err.guidance
