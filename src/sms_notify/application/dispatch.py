"""Application dispatch – the send-one-notification use case.

Stages run strictly in order and stop at the first failure::

    START → PHONE_VALIDATED → PROVIDER_SELECTED → CREDENTIALS_LOADED → SENT → SUCCESS
                                                                           ↘ FAILED

The dispatcher never raises for expected failures and never retries; the
caller turns :attr:`DispatchResult.exit_code` into the process status.
"""
from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from enum import Enum

from sms_notify.application.notifications import (
    ProviderFactory,
    SendOutcome,
    build_provider,
)
from sms_notify.config import (
    ProviderKind,
    detect_provider,
    load_credentials,
    no_provider_error,
)
from sms_notify.kernel.errors import ErrorDetail, ExitCode, exit_code_for
from sms_notify.kernel.types import (
    DEFAULT_REGION,
    MessageEncodingInfo,
    NormalizedPhoneNumber,
    analyze,
    normalize,
)
from sms_notify.observability.logging import get_logger, mask_destination

__all__ = [
    "DispatchRequest",
    "DispatchResult",
    "DispatchStage",
    "Dispatcher",
    "SegmentWarningHandler",
]

logger = get_logger(__name__)

SegmentWarningHandler = Callable[[MessageEncodingInfo], None]


class DispatchStage(str, Enum):
    START = "start"
    PHONE_VALIDATED = "phone_validated"
    PROVIDER_SELECTED = "provider_selected"
    CREDENTIALS_LOADED = "credentials_loaded"
    SENT = "sent"
    SUCCESS = "success"
    FAILED = "failed"


@dataclasses.dataclass(frozen=True)
class DispatchRequest:
    """Raw command-line input."""

    destination: str
    message: str
    default_region: str = DEFAULT_REGION


@dataclasses.dataclass(frozen=True)
class DispatchResult:
    """Terminal state of one dispatch.

    ``last_stage`` is the last stage reached before ``error`` occurred;
    it is ``None`` on success.
    """

    stage: DispatchStage
    error: ErrorDetail | None = None
    last_stage: DispatchStage | None = None
    phone: NormalizedPhoneNumber | None = None
    provider: ProviderKind | None = None
    encoding: MessageEncodingInfo | None = None
    outcome: SendOutcome | None = None

    @property
    def success(self) -> bool:
        return self.stage is DispatchStage.SUCCESS

    @property
    def exit_code(self) -> ExitCode:
        if self.success:
            return ExitCode.SUCCESS
        return exit_code_for(self.error.kind if self.error else None)


class Dispatcher:
    """Validate, resolve credentials, build the provider and send once.

    Parameters
    ----------
    environ:
        Read-only environment mapping handed to the credential resolver.
    provider_factory:
        Builds a provider from a credential bundle; tests substitute a fake.
    on_segment_warning:
        Called before sending when an address-based message needs more
        than one SMS segment.
    """

    def __init__(
        self,
        environ: Mapping[str, str | None],
        *,
        provider_factory: ProviderFactory = build_provider,
        on_segment_warning: SegmentWarningHandler | None = None,
    ) -> None:
        self._environ = environ
        self._provider_factory = provider_factory
        self._on_segment_warning = on_segment_warning

    def _fail(self, stage: DispatchStage, error: ErrorDetail, **context: object) -> DispatchResult:
        logger.debug("dispatch.failed", stage=stage.value, kind=error.kind.value)
        return DispatchResult(stage=DispatchStage.FAILED, error=error, last_stage=stage, **context)  # type: ignore[arg-type]

    async def dispatch(self, request: DispatchRequest) -> DispatchResult:
        phone_result = normalize(request.destination, request.default_region)
        if phone_result.is_err():
            return self._fail(DispatchStage.START, phone_result.error)
        phone = phone_result.value
        logger.debug("dispatch.phone_validated", dest=mask_destination(phone.canonical), region=phone.region_code)

        kind = detect_provider(self._environ)
        if kind is ProviderKind.NONE:
            return self._fail(DispatchStage.PHONE_VALIDATED, no_provider_error(), phone=phone)
        logger.debug("dispatch.provider_selected", provider=kind.value)

        credentials_result = load_credentials(kind, self._environ)
        if credentials_result.is_err():
            return self._fail(DispatchStage.PROVIDER_SELECTED, credentials_result.error, phone=phone, provider=kind)
        provider = self._provider_factory(credentials_result.value)

        encoding: MessageEncodingInfo | None = None
        if not kind.is_push:
            encoding = analyze(request.message)
            if encoding.is_multipart and self._on_segment_warning is not None:
                self._on_segment_warning(encoding)

        outcome = await provider.send(phone.canonical, request.message)
        context = {"phone": phone, "provider": kind, "encoding": encoding, "outcome": outcome}
        if outcome.error is not None:
            return self._fail(DispatchStage.SENT, outcome.error, **context)

        logger.debug("dispatch.sent", provider=kind.value, message_id=outcome.message_id)
        return DispatchResult(stage=DispatchStage.SUCCESS, **context)  # type: ignore[arg-type]
