"""Bridging awaitables into Results.

Provides the async door from exception-based code into Results:
    - resolve: await an in-flight awaitable, capturing its outcome
    - try_catch_async: call a coroutine function and resolve what it returns

Neither function schedules anything of its own. They suspend exactly once,
on the awaitable they are given, and never raise for a failed computation.
Cancellation of the awaiting task propagates as usual (`CancelledError` is
not an `Exception`).

Example:
    >>> import asyncio
    >>> async def fetch() -> int:
    ...     return 42
    >>> asyncio.run(resolve(fetch())).value()
    42
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from .observability import log_captured
from .result import Result

T = TypeVar("T")

logger = logging.getLogger("fallible.interop")


async def resolve(pending: Awaitable[T]) -> Result[T, Any]:
    """Await `pending`: success of its value, or failure of the exception it raised."""
    try:
        return Result(await pending, None)
    except Exception as e:
        log_captured(logger, "resolve", e)
        return Result(None, e)


async def try_catch_async(fn: Callable[[], Awaitable[T]]) -> Result[T, Any]:
    """Call `fn` and resolve the awaitable it returns.

    An exception raised by `fn` itself, before any awaitable exists, is
    captured the same way as one raised while awaiting.
    """
    try:
        pending = fn()
    except Exception as e:
        log_captured(logger, "try_catch_async", e)
        return Result(None, e)
    return await resolve(pending)
