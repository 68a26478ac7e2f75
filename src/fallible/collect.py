"""Collection operations over Results.

Example:
    >>> from fallible import success, failure
    >>> sequence([success(1), success(2)]).value()
    [1, 2]
    >>> collect_results([success(1), failure("e1"), failure("e2")]).failure_value
    ['e1', 'e2']
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, TypeVar

from .result import Result

T = TypeVar("T")
E = TypeVar("E")


def sequence(results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """Success of all values in order, or the first failure unchanged (fail fast)."""
    values: list[T] = []
    for result in results:
        if result.is_not():
            return result  # type: ignore[return-value]
        values.append(result.success_value)  # type: ignore[arg-type]
    return Result(values, None)


def collect_results(results: Iterable[Result[T, E]]) -> Result[list[T], list[E]]:
    """Like `sequence`, but gathers every failure instead of stopping at the first."""
    values, errors = partition(results)
    return Result(values, None) if not errors else Result(None, errors)


def partition(results: Iterable[Result[T, E]]) -> tuple[list[T], list[E]]:
    """Split Results into (success values, failure errors), preserving order."""
    values: list[Any] = []
    errors: list[Any] = []
    for result in results:
        if result.is_ok():
            values.append(result.success_value)
        else:
            errors.append(result.failure_value)
    return values, errors
