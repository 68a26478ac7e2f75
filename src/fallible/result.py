"""Result container for fallible operations.

A `Result` is either a success carrying a value or a failure carrying an
error. Fallible code returns one instead of raising, and callers compose the
outcome through a small fluent API:

- Chaining: ok, not_, to
- Extraction: value, or_, default_value, default_value_with
- Boundary: try_catch (exceptions -> Result), raise_if_not_ok (Result -> exceptions)

Payloads may be deferred by wrapping a producer in `lazy()`; the producer runs
at most once, on first access. `None` is the absence marker: a success whose
value is `None` reads exactly like a success with no value.
"""

from __future__ import annotations

import logging
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    ClassVar,
    Generic,
    TypeGuard,
    TypeVar,
    overload,
)

from .errors import FailureError
from .lazy import Lazy
from .observability import log_captured
from .types import Tag

if TYPE_CHECKING:
    from collections.abc import Iterator

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type
U = TypeVar("U")  # Mapped success type

logger = logging.getLogger("fallible.result")


def _read(slot: Any) -> Any:
    """Value held by a slot, running a deferred producer once if needed."""
    if slot is None:
        return None
    return slot.get() if isinstance(slot, Lazy) else slot


class Result(Generic[T, E]):
    """Discriminated container holding either a success value or a failure error.

    State is decided by the failure slot alone: a Result is a failure exactly
    when a failure payload was supplied, and a success otherwise. Deciding the
    state never runs a deferred producer.

    Every operation returns a new Result (or a plain value) and leaves the
    receiver untouched.

    Examples:
        >>> success(21).ok(lambda x: x * 2).value()
        42
        >>> failure("boom").ok(lambda x: x * 2).failure_value
        'boom'
        >>> success(5).ok(lambda _: None).value()  # side-effect only keeps the value
        5
        >>> failure("bad").default_value(0)
        0

        Exceptions raised by `ok`/`not_` callbacks become failures:
        >>> def explode(_):
        ...     raise ValueError("x")
        >>> success(5).ok(explode).failure_value
        ValueError('x')

    Notes:
        - `not_` rewrites the error but can never turn a failure into a
          success. Recover with `or_`, `default_value` or `match` instead.
        - `failure(None)` has an empty failure slot and is therefore a
          success with no value.
    """

    __slots__ = ("_data", "_error")

    OK: ClassVar[Tag] = Tag.OK
    NOT: ClassVar[Tag] = Tag.NOT

    def __init__(self, data: T | Lazy[T] | None = None, error: E | Lazy[E] | None = None) -> None:
        """Private constructor. Use success() or failure() instead."""
        if data is not None and error is not None:
            raise ValueError("Result cannot hold both a success value and a failure error")
        self._data = data
        self._error = error

    # ─── State ─────────────────────────────────────────────────────────

    def is_ok(self) -> bool:
        """Check if Result is a success."""
        return self._error is None

    def is_not(self) -> bool:
        """Check if Result is a failure."""
        return self._error is not None

    # ─── Accessors ─────────────────────────────────────────────────────

    @property
    def success_value(self) -> T | None:
        """Success payload, or None for failures and empty successes."""
        return _read(self._data)

    @property
    def failure_value(self) -> E | None:
        """Failure payload, or None for successes."""
        return _read(self._error)

    # ─── Extraction ────────────────────────────────────────────────────

    def default_value(self, fallback: U) -> T | U:
        """Success value, or `fallback` when failed or when the value is None."""
        if self._error is None:
            data = self.success_value
            if data is not None:
                return data
        return fallback

    def default_value_with(self, fn: Callable[[T | None], U]) -> T | U:
        """Like `default_value`, computing the fallback from the (absent) success value."""
        data = self.success_value if self._error is None else None
        return data if data is not None else fn(data)

    @overload
    def value(self) -> T | None: ...
    @overload
    def value(self, mutator: Callable[[T], U]) -> U | None: ...

    def value(self, mutator: Callable[[T], Any] | None = None) -> Any:
        """Success value, optionally passed through `mutator`.

        Failures always give None and never run the mutator.
        """
        if self._error is not None:
            return None
        data = self.success_value
        return mutator(data) if mutator is not None else data  # type: ignore[arg-type]

    def or_(self, fallback: Callable[[E], U]) -> T | U:
        """Success value, or `fallback(error)` on failure."""
        if self._error is None:
            return self.success_value  # type: ignore[return-value]
        return fallback(self.failure_value)  # type: ignore[arg-type]

    # ─── Chaining ──────────────────────────────────────────────────────

    def to(self, mutator: Callable[[T], U]) -> Result[U, E]:
        """Map the success value. Failures pass through unchanged.

        Exceptions raised by `mutator` propagate to the caller; use `ok` when
        the transform may fail.
        """
        if self._error is not None:
            return self  # type: ignore[return-value]
        return Result(mutator(self.success_value), None)  # type: ignore[arg-type]

    def ok(self, callback: Callable[..., Any], *, with_result: bool = False) -> Result[Any, Any]:
        """Continue on the success track.

        On success, calls `callback(value)` (or `callback(value, self)` with
        `with_result=True`) and wraps its return in a new success. A None
        return keeps the current value, so side-effect callbacks are safe.
        Exceptions from the callback become the error of a new failure.

        On failure, returns the receiver without calling `callback`.

        Example:
            >>> success(2).ok(lambda x: x + 1).ok(str).value()
            '3'
        """
        if self._error is not None:
            return self
        try:
            data = self.success_value
            out = callback(data, self) if with_result else callback(data)
        except Exception as e:
            log_captured(logger, "ok", e)
            return Result(None, e)
        return Result(data if out is None else out, None)

    def not_(self, callback: Callable[..., Any], *, with_result: bool = False) -> Result[Any, Any]:
        """Continue on the failure track by rewriting the error.

        On failure, calls `callback(error)` (or `callback(error, self)` with
        `with_result=True`) and uses its return as the new error. A None return
        keeps the current error; an exception becomes the new error. The result
        is always a failure: this operator transforms errors, it does not
        recover from them.

        On success, returns the receiver without calling `callback`.

        Example:
            >>> failure(KeyError("id")).not_(lambda e: f"missing {e}").failure_value
            "missing 'id'"
        """
        if self._error is None:
            return self
        try:
            err = self.failure_value
            out = callback(err, self) if with_result else callback(err)
        except Exception as e:
            log_captured(logger, "not", e)
            return Result(None, e)
        return Result(None, self._error if out is None else out)

    # ─── Boundary ──────────────────────────────────────────────────────

    def raise_if_not_ok(self) -> None:
        """Raise the contained error if this is a failure; no-op on success.

        Exception payloads are raised as-is. Any other payload is wrapped in
        `FailureError`, which keeps it on `.error`.
        """
        if self._error is None:
            return
        err = self.failure_value
        if isinstance(err, BaseException):
            raise err
        raise FailureError(err)

    # ─── Dunder Methods ────────────────────────────────────────────────

    def __bool__(self) -> bool:
        """True for successes."""
        return self._error is None

    def __repr__(self) -> str:
        if self._error is None:
            return f"success({self._data!r})"
        return f"failure({self._error!r})"

    def __eq__(self, other: object) -> bool:
        """Structural equality on state and (evaluated) payloads."""
        if not isinstance(other, Result):
            return NotImplemented
        if self.is_ok() != other.is_ok():
            return False
        if self._error is None:
            return self.success_value == other.success_value
        return self.failure_value == other.failure_value

    __hash__ = None  # type: ignore[assignment]

    def __iter__(self) -> Iterator[T]:
        """Yield the success value, if there is one."""
        if self._error is None:
            data = self.success_value
            if data is not None:
                yield data


# ═════════════════════════════════════════════════════════════════════════════
# Predicates
# ═════════════════════════════════════════════════════════════════════════════


def is_success(candidate: object) -> TypeGuard[Result[Any, Any]]:
    """True for success Results. Anything that is not a Result gives False."""
    return isinstance(candidate, Result) and candidate._error is None


def is_failure(candidate: object) -> TypeGuard[Result[Any, Any]]:
    """True for failure Results. Anything that is not a Result gives False."""
    return isinstance(candidate, Result) and candidate._error is not None


# ═════════════════════════════════════════════════════════════════════════════
# Constructor Functions
# ═════════════════════════════════════════════════════════════════════════════


def success(value: T | Lazy[T] = Tag.OK) -> Result[T, Any]:  # type: ignore[assignment]
    """Construct a success. Without an argument the payload is `Tag.OK` ("ok")."""
    return Result(value, None)


def failure(error: E | Lazy[E]) -> Result[Any, E]:
    """Construct a failure."""
    return Result(None, error)


def from_(
    value: T | Lazy[T],
    condition: bool | Callable[[T], bool],
    error: E | Lazy[E],
) -> Result[T, E]:
    """Build a Result by testing a value.

    The value is resolved first (running a lazy producer), then `condition` is
    applied: a bool is used directly, a callable is called with the value.
    Passing gives a success of the value, otherwise a failure of the resolved
    error.

    Example:
        >>> from_(42, lambda v: v > 0, "must be positive").value()
        42
        >>> from_(-1, lambda v: v > 0, "must be positive").failure_value
        'must be positive'
    """
    resolved: T = _read(value)
    passed = condition(resolved) if callable(condition) else bool(condition)
    if passed:
        return Result(resolved, None)
    return Result(None, _read(error))


def try_catch(fn: Callable[[], T]) -> Result[T, Exception]:
    """Call `fn` now, capturing its return value or the exception it raises.

    Example:
        >>> try_catch(lambda: int("7")).value()
        7
        >>> type(try_catch(lambda: int("x")).failure_value).__name__
        'ValueError'
    """
    try:
        return Result(fn(), None)
    except Exception as e:
        log_captured(logger, "try_catch", e)
        return Result(None, e)
