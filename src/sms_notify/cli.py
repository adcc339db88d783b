"""Command-line entry point – ``notify PHONE_NUMBER MESSAGE``."""
from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import Annotated, Optional

import typer

from sms_notify import __version__
from sms_notify.application.dispatch import Dispatcher, DispatchRequest
from sms_notify.config import load_config_file
from sms_notify.kernel.errors import ErrorDetail, ErrorKind, ExitCode
from sms_notify.kernel.types import DEFAULT_REGION, Encoding, MessageEncodingInfo
from sms_notify.observability.logging import configure_logging, get_logger, resolve_level

logger = get_logger(__name__)

LOG_LEVEL_ENV = "NOTIFY_LOG_LEVEL"

EPILOG = """\
\b
Environment Variables (Pushover - $5, reliable iOS/Android push):
  PUSHOVER_USER          Your user key from https://pushover.net
  PUSHOVER_TOKEN         API token from your Pushover application

\b
Environment Variables (ntfy.sh - free, requires app open on iOS):
  NTFY_TOPIC             Your ntfy topic name (e.g., "my-alerts")
  NTFY_SERVER            Optional server URL (default: https://ntfy.sh)

\b
Environment Variables (Twilio - requires A2P 10DLC registration):
  TWILIO_ACCOUNT_SID     Twilio Account SID
  TWILIO_AUTH_TOKEN      Twilio Auth Token
  TWILIO_PHONE_NUMBER    Sender phone number

\b
Environment Variables (Email Gateway - carrier dependent):
  EMAIL_USER             Email address (e.g., you@gmail.com)
  EMAIL_PASS             Email password or app password
  SMS_CARRIER            Recipient carrier: att, tmobile, verizon, sprint, ...
  EMAIL_HOST             SMTP server (default: smtp.gmail.com)
  EMAIL_PORT             SMTP port (default: 587)
  EMAIL_SECURE           Use implicit TLS (default: false)

Variables may also be set in ~/.config/notify/.env.

\b
Examples:
  $ notify "+14155552671" "Hello world"
  $ notify --country GB "07700900123" "UK message"
  $ notify -q "+14155552671" "Silent send"
"""

app = typer.Typer(
    name="notify",
    help="Send an SMS or push notification to a phone number.",
    add_completion=False,
    pretty_exceptions_enable=False,
)


def format_error(error: ErrorDetail) -> str:
    """Summary line, blank line, guidance."""
    if not error.guidance:
        return f"Error: {error.message}"
    return f"Error: {error.message}\n\n{error.guidance}"


def unexpected_error(exc: Exception) -> ErrorDetail:
    return ErrorDetail(
        kind=ErrorKind.PROVIDER_ERROR,
        message=f"Unexpected failure: {exc}",
        guidance=f"Run again with --verbose or {LOG_LEVEL_ENV}=DEBUG to log the full traceback.",
    )


def format_segment_warning(info: MessageEncodingInfo) -> str:
    note = " (contains emoji/special characters)" if info.encoding is Encoding.UCS_2 else ""
    return (
        f"Warning: Message will be sent as {info.segment_count} SMS segments{note} "
        f"({info.effective_char_count} characters)"
    )


def build_environ(env_file: Path | None) -> dict[str, str]:
    """Config-file values overlaid by the real process environment."""
    environ = load_config_file(env_file)
    environ.update(os.environ)
    return environ


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.command(epilog=EPILOG)
def send(
    phone_number: Annotated[str, typer.Argument(help="Destination phone number (E.164 or national format)")],
    message: Annotated[str, typer.Argument(help="SMS message text")],
    country: Annotated[
        str, typer.Option("--country", "-c", help="Default country for national numbers")
    ] = DEFAULT_REGION,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Suppress success output")] = False,
    env_file: Annotated[
        Optional[Path], typer.Option("--env-file", help="Config file (default: ~/.config/notify/.env)")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output to stderr")] = False,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit"),
    ] = None,
) -> None:
    environ = build_environ(env_file)
    level = "DEBUG" if verbose else environ.get(LOG_LEVEL_ENV)
    configure_logging(resolve_level(level))

    def warn_segments(info: MessageEncodingInfo) -> None:
        if not quiet:
            typer.echo(format_segment_warning(info), err=True)

    dispatcher = Dispatcher(environ, on_segment_warning=warn_segments)
    request = DispatchRequest(destination=phone_number, message=message, default_region=country)

    try:
        result = asyncio.run(dispatcher.dispatch(request))
    except Exception as exc:  # noqa: BLE001
        logger.debug("dispatch.unexpected_error", error_type=type(exc).__name__, exc_info=True)
        typer.echo(format_error(unexpected_error(exc)), err=True)
        raise typer.Exit(ExitCode.GENERAL_ERROR) from exc

    if not result.success:
        if result.error is not None:
            typer.echo(format_error(result.error), err=True)
        raise typer.Exit(result.exit_code)

    if not quiet and result.outcome is not None:
        typer.echo(f"Message sent to {result.outcome.destination} (ID: {result.outcome.message_id})")


def main() -> None:
    app()


__all__ = ["app", "build_environ", "format_error", "format_segment_warning", "main", "unexpected_error"]
