"""Fallible - success/failure Results for Python without try/except plumbing.

Fallible operations return a `Result` instead of raising. Callers chain,
transform and finally unwrap the outcome through a small fluent API, and
cross into exception-based code through exactly two doors: `try_catch` /
`try_catch_async` (exceptions -> Result) and `raise_if_not_ok`
(Result -> exceptions).

Quick Start:
    >>> from fallible import success, failure, try_catch, match
    >>>
    >>> def check_range(port: int) -> int:
    ...     if not 0 < port < 65536:
    ...         raise ValueError("out of range")
    ...     return port
    >>>
    >>> def parse_port(raw: str):
    ...     return try_catch(lambda: int(raw)).ok(check_range)
    >>>
    >>> parse_port("8080").value()
    8080
    >>> parse_port("http").default_value(80)
    80
    >>> match(parse_port("99999"), ok=str, not_=lambda e: f"bad port: {e}")
    'bad port: out of range'

Deferred Payloads:
    >>> from fallible import lazy
    >>> result = success(lazy(lambda: expensive()))  # doctest: +SKIP
    >>> result.success_value  # producer runs here, once  # doctest: +SKIP

Async Interop:
    >>> from fallible import resolve, try_catch_async, match_tag, Tag
    >>> result = await resolve(client.get("/users"))  # doctest: +SKIP
    >>> await match_tag(Tag.NOT, fetch_user(1), log_error)  # doctest: +SKIP
"""

from __future__ import annotations

__version__ = "0.1.0"

from .collect import collect_results, partition, sequence
from .errors import ErrorInfo, FailureError, InvalidMatchTagError, ResultError
from .interop import resolve, try_catch_async
from .lazy import Lazy, lazy
from .match import match, match_async, match_tag, match_tag_async
from .observability import configure_logging
from .result import Result, failure, from_, is_failure, is_success, success, try_catch
from .settings import FallibleSettings, LoggingSettings, clear_settings_cache, get_settings
from .types import AnyResult, PendingResult, Tag

__all__ = [
    # Core type
    "Result", "Tag", "AnyResult", "PendingResult",
    # Constructors
    "success", "failure", "from_", "try_catch",
    # Predicates
    "is_success", "is_failure",
    # Deferred payloads
    "Lazy", "lazy",
    # Async interop
    "resolve", "try_catch_async",
    # Matching
    "match", "match_async", "match_tag", "match_tag_async",
    # Collection ops
    "sequence", "collect_results", "partition",
    # Errors
    "ResultError", "FailureError", "InvalidMatchTagError", "ErrorInfo",
    # Config & logging
    "FallibleSettings", "LoggingSettings", "get_settings", "clear_settings_cache", "configure_logging",
]
