"""Exceptions raised by the Result API itself.

Data-level failures travel inside `Result` values. The classes here cover the
two places where the library raises on purpose: converting a failure back
into an exception at a boundary, and misuse of the tag dispatcher.
"""

from __future__ import annotations

import traceback
from typing import Any, Self

from pydantic import BaseModel


class ResultError(Exception):
    """Base class for exceptions raised by fallible."""

    __slots__ = ()


class FailureError(ResultError):
    """Raised by `raise_if_not_ok()` for failure payloads that are not exceptions.

    The original payload is kept on `error` so boundary code can still
    inspect the structured failure.
    """

    __slots__ = ("error",)

    def __init__(self, error: Any) -> None:
        self.error = error
        super().__init__(str(error))

    def __repr__(self) -> str:
        return f"FailureError({self.error!r})"


class InvalidMatchTagError(ResultError, ValueError):
    """Tag passed to `match_tag` is neither `Tag.OK` nor `Tag.NOT`."""

    def __init__(self, tag: object) -> None:
        self.tag = tag
        super().__init__(
            f'The match type "{tag}" is not valid!\n'
            "Avoid using plain strings (prefer `Tag.OK` or `Tag.NOT`)."
        )


class ErrorInfo(BaseModel):
    """Serializable description of a captured exception."""

    model_config = {"frozen": True}

    type: str
    message: str
    details: str | None = None

    @classmethod
    def from_exception(cls, exc: BaseException, *, include_trace: bool = False) -> Self:
        """Describe `exc`, optionally with its formatted traceback."""
        details = "".join(traceback.format_exception(exc)) if include_trace else None
        return cls(type=type(exc).__name__, message=str(exc), details=details)

    def render(self) -> str:
        """One-line form, followed by the traceback when present."""
        head = f"{self.type}: {self.message}" if self.message else self.type
        return f"{head}\n{self.details}" if self.details else head

    __str__ = render
