"""Markers and type aliases shared across the Result API."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from collections.abc import Awaitable
    from typing import Any

    from .result import Result


class Tag(StrEnum):
    """Action tags for `match_tag`. `Tag.OK` is also the payload of a bare `success()`."""
    OK = "ok"
    NOT = "not"


# ═══════════════════════════════════════════════════════════════════════════════
# Type Aliases
# ═══════════════════════════════════════════════════════════════════════════════

AnyResult: TypeAlias = "Result[Any, Any]"
PendingResult: TypeAlias = "Awaitable[Result[Any, Any]]"
