"""Summary: Structured logging helper shared by the formatting use cases.
Why: Attach processing events and context extras the Rich handler renders."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from srcfmt.platform.logging import logger

from ..domain.processing_types import ProcessingEvent


def log_event(
    level: int,
    event: ProcessingEvent,
    message: str,
    *message_args: object,
    **context: Any,
) -> None:
    """Log ``message`` with ``event`` and stringified path extras."""

    extra: dict[str, Any] = {"processing_event": event.value}
    for key, value in context.items():
        extra[key] = str(value) if isinstance(value, Path) else value
    logger.log(level, message, *message_args, extra=extra, stacklevel=2)


__all__ = ["log_event"]
