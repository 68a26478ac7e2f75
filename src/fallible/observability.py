"""Logging helpers for the `fallible` logger namespace.

Every module logs through `logging.getLogger("fallible.<module>")`. Nothing is
emitted unless the host application (or `configure_logging`) enables it.
"""

from __future__ import annotations

import logging
from typing import TextIO

from pydantic import ValidationError

from .errors import ErrorInfo
from .settings import FallibleSettings, LoggingSettings, get_settings

ROOT_LOGGER = "fallible"

_handler: logging.Handler | None = None


def configure_logging(
    settings: FallibleSettings | None = None,
    *,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Apply configured level to the `fallible` logger.

    With `stream`, a single stream handler is attached (replacing one added by
    an earlier call), so repeated configuration never duplicates output.
    """
    global _handler
    settings = settings or get_settings()
    log = logging.getLogger(ROOT_LOGGER)
    log.setLevel(settings.effective_level)

    if stream is not None:
        if _handler is not None:
            log.removeHandler(_handler)
        _handler = logging.StreamHandler(stream)
        _handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
        log.addHandler(_handler)
    return log


def log_captured(log: logging.Logger, operation: str, exc: BaseException) -> None:
    """Record an exception that was converted into a failure Result.

    A broken environment configuration falls back to the default logging
    settings so it can never replace the captured failure.
    """
    if not log.isEnabledFor(logging.DEBUG):
        return
    try:
        cfg = get_settings().logging
    except ValidationError:
        cfg = LoggingSettings.model_construct()
    if not cfg.log_captured:
        return
    info = ErrorInfo.from_exception(exc, include_trace=cfg.include_traceback)
    log.debug("[%s] captured %s", operation, info.render())


def reset_logging() -> None:
    """Detach the handler installed by `configure_logging` (useful for testing)."""
    global _handler
    if _handler is not None:
        logging.getLogger(ROOT_LOGGER).removeHandler(_handler)
        _handler = None


__all__ = ["ROOT_LOGGER", "configure_logging", "log_captured", "reset_logging"]
