"""Pattern-matching dispatch over Results and pending Results.

Two entry points, each accepting either a `Result` or an awaitable of one:

- `match(subject, ok=..., not_=...)` runs the handler for whichever state the
  Result is in. `not_` is optional; an unhandled failure gives None.
- `match_tag(tag, subject, handler)` runs `handler` only when the Result is in
  the state named by `tag` (`Tag.OK` or `Tag.NOT`), and gives None otherwise.

Given an awaitable, both return a coroutine; given a Result, they dispatch
immediately. `match_async` / `match_tag_async` are the explicit async forms.

If a pending computation raises instead of producing a Result, the exception
is treated as a failure payload: it goes to the `not_` handler (or to a
`Tag.NOT` handler), and the success side gives None.

Example:
    >>> from fallible import success, failure, Tag
    >>> match(success(42), ok=lambda v: f"got {v}", not_=lambda e: f"failed: {e}")
    'got 42'
    >>> match(failure("nope"), ok=lambda v: v) is None
    True
    >>> match_tag(Tag.NOT, failure("nope"), str.upper)
    'NOPE'
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any, TypeVar, overload

from .errors import InvalidMatchTagError
from .observability import log_captured
from .result import Result
from .types import Tag

R = TypeVar("R")
N = TypeVar("N")

logger = logging.getLogger("fallible.match")


def _expect_result(value: object) -> Result[Any, Any]:
    """Return `value` if it is a Result, else raise TypeError."""
    if not isinstance(value, Result):
        raise TypeError(f"match expects a Result or an awaitable of one, got {type(value).__name__}")
    return value


def _check_tag(tag: object) -> Tag:
    """Normalize `tag` to a Tag member, rejecting anything else."""
    if tag == Tag.OK:
        return Tag.OK
    if tag == Tag.NOT:
        return Tag.NOT
    raise InvalidMatchTagError(tag)


# ─────────────────────────────────────────────────────────────────────────────
# Handler form
# ─────────────────────────────────────────────────────────────────────────────


def _dispatch(
    result: Result[Any, Any],
    ok: Callable[[Any], R],
    not_: Callable[[Any], N] | None,
) -> R | N | None:
    if result.is_ok():
        return ok(result.success_value)
    return not_(result.failure_value) if not_ is not None else None


@overload
def match(
    subject: Awaitable[Result[Any, Any]],
    *,
    ok: Callable[[Any], R],
    not_: Callable[[Any], N] | None = None,
) -> Coroutine[Any, Any, R | N | None]: ...
@overload
def match(
    subject: Result[Any, Any],
    *,
    ok: Callable[[Any], R],
    not_: Callable[[Any], N] | None = None,
) -> R | N | None: ...


def match(
    subject: Result[Any, Any] | Awaitable[Result[Any, Any]],
    *,
    ok: Callable[[Any], R],
    not_: Callable[[Any], N] | None = None,
) -> R | N | None | Coroutine[Any, Any, R | N | None]:
    """Dispatch to `ok(value)` or `not_(error)` based on the Result's state."""
    if inspect.isawaitable(subject):
        return match_async(subject, ok=ok, not_=not_)
    return _dispatch(_expect_result(subject), ok, not_)


async def match_async(
    pending: Result[Any, Any] | Awaitable[Result[Any, Any]],
    *,
    ok: Callable[[Any], R],
    not_: Callable[[Any], N] | None = None,
) -> R | N | None:
    """Await `pending`, then dispatch like `match`.

    If awaiting raises, the exception is handed to `not_` (or None is returned).
    A settled Result is dispatched as-is.
    """
    if not inspect.isawaitable(pending):
        return _dispatch(_expect_result(pending), ok, not_)
    try:
        result = await pending
    except Exception as e:
        log_captured(logger, "match", e)
        return not_(e) if not_ is not None else None
    return _dispatch(_expect_result(result), ok, not_)


# ─────────────────────────────────────────────────────────────────────────────
# Tag form
# ─────────────────────────────────────────────────────────────────────────────


def _dispatch_tag(tag: Tag, result: Result[Any, Any], handler: Callable[[Any], R]) -> R | None:
    if tag is Tag.OK:
        return handler(result.success_value) if result.is_ok() else None
    return handler(result.failure_value) if result.is_not() else None


async def _await_tag(
    tag: Tag,
    pending: Result[Any, Any] | Awaitable[Result[Any, Any]],
    handler: Callable[[Any], R],
) -> R | None:
    if not inspect.isawaitable(pending):
        return _dispatch_tag(tag, _expect_result(pending), handler)
    try:
        result = await pending
    except Exception as e:
        log_captured(logger, f"match_tag:{tag}", e)
        return handler(e) if tag is Tag.NOT else None
    return _dispatch_tag(tag, _expect_result(result), handler)


def match_tag(
    tag: Tag | str,
    subject: Result[Any, Any] | Awaitable[Result[Any, Any]],
    handler: Callable[[Any], R],
) -> R | None | Coroutine[Any, Any, R | None]:
    """Run `handler` only if the Result is in the state named by `tag`.

    Raises:
        InvalidMatchTagError: immediately, for a tag other than `Tag.OK` /
            `Tag.NOT`, even when `subject` is an awaitable.
    """
    checked = _check_tag(tag)
    if inspect.isawaitable(subject):
        return _await_tag(checked, subject, handler)
    return _dispatch_tag(checked, _expect_result(subject), handler)


def match_tag_async(
    tag: Tag | str,
    pending: Result[Any, Any] | Awaitable[Result[Any, Any]],
    handler: Callable[[Any], R],
) -> Coroutine[Any, Any, R | None]:
    """Explicit async form of `match_tag`. The tag is validated before anything is awaited.

    A settled Result is accepted too and dispatched when the coroutine runs.
    """
    return _await_tag(_check_tag(tag), pending, handler)
