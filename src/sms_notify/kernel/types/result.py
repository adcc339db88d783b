"""Result[T, E] monad – Ok and Err variants."""

from __future__ import annotations

from typing import Callable, Generic, NoReturn, TypeAlias, TypeVar

from sms_notify.kernel.errors.base import ErrorDetail, NotifyError

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


class Ok(Generic[T]):
    """Successful result variant."""

    __slots__ = ("_value",)
    __match_args__ = ("value",)

    def __init__(self, value: T) -> None:
        self._value = value

    @property
    def value(self) -> T:
        return self._value

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self._value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        return self._value

    def map(self, func: Callable[[T], U]) -> "Ok[U]":
        return Ok(func(self._value))

    def flat_map(self, func: "Callable[[T], Result[U, E]]") -> "Result[U, E]":
        return func(self._value)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Ok) and other._value == self._value

    def __hash__(self) -> int:
        return hash(("ok", self._value))

    def __repr__(self) -> str:
        return f"Ok({self._value!r})"


class Err(Generic[E]):
    """Error result variant.

    ``unwrap()`` raises the error itself when it is an exception, and a
    :class:`NotifyError` when it is an :class:`ErrorDetail`.
    """

    __slots__ = ("_error",)
    __match_args__ = ("error",)

    def __init__(self, error: E) -> None:
        self._error = error

    @property
    def error(self) -> E:
        return self._error

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        if isinstance(self._error, BaseException):
            raise self._error
        if isinstance(self._error, ErrorDetail):
            raise self._error.to_exception()
        raise ValueError(f"unwrap() called on Err({self._error!r})")

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, func: Callable[[T], U]) -> "Err[E]":  # noqa: ARG002
        return self

    def flat_map(self, func: "Callable[[T], Result[U, E]]") -> "Err[E]":  # noqa: ARG002
        return self

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Err) and other._error == self._error

    def __hash__(self) -> int:
        return hash(("err", self._error))

    def __repr__(self) -> str:
        return f"Err({self._error!r})"


Result: TypeAlias = Ok[T] | Err[E]

__all__ = ["Err", "Ok", "Result"]
