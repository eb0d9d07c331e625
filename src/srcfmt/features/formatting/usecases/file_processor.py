# /*
# Where: features/formatting/usecases/file_processor.py
# What: Per-file pipeline: read, digest, cache check, dispatch, compare, rewrite.
# Why: Keep the orchestrator free of per-file state transitions.
# Assumptions:
# - The orchestrator has already checked that the file exists and is writable.
# - Read errors propagate so the orchestrator can count them as failures.
# Trade-offs:
# - The cache records the post-format digest, so a file is recognised as
#   canonical next run only when the formatter is a fixed point on its output.
# */

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from srcfmt.platform.filesystem import atomic_write_text, read_text

from ..domain.errors import FormatError
from ..domain.line_ending import LineEnding
from ..domain.processing_types import FileResult, FormatOutcome, ProcessingEvent
from .event_logging import log_event
from .hash_cache import cache_key, compute_digest
from .ports import DigestCachePort, Formatter


@dataclass(frozen=True, slots=True)
class FormatRequest:
    """Per-file formatting context; created and consumed within one call."""

    path: Path
    key: str
    formatter: Formatter
    line_ending: LineEnding
    encoding: str


@dataclass(slots=True)
class _FileContext:
    path: Path
    original_digest: str
    sequence: int | None
    total: int | None
    start_time: float = field(default_factory=time.perf_counter)


_OUTCOME_LEVELS: dict[FormatOutcome, int] = {
    FormatOutcome.SUCCESS: logging.INFO,
    FormatOutcome.FAIL: logging.WARNING,
    FormatOutcome.SKIPPED: logging.DEBUG,
}


class FileProcessor:
    """Run single files through the formatting state machine.

    Every call ends in exactly one of SUCCESS, FAIL or SKIPPED. The cache is
    advanced only when the content on disk is known to be canonical: after a
    no-op format (original digest) or after a successful rewrite (formatted
    digest). A FormatError or a failed write leaves both the file and the
    cache entry untouched.
    """

    def __init__(
        self,
        formatters: Sequence[Formatter],
        cache: DigestCachePort,
        *,
        base_dir: Path,
        encoding: str,
        line_ending: LineEnding,
        dry_run: bool = False,
    ) -> None:
        self.formatters: tuple[Formatter, ...] = tuple(formatters)
        self.cache: DigestCachePort = cache
        self.base_dir: Path = base_dir
        self.encoding: str = encoding
        self.line_ending: LineEnding = line_ending
        self.dry_run: bool = dry_run

    def select_formatter(self, path: Path) -> Formatter | None:
        """Return the initialized formatter handling ``path``, if any."""

        for formatter in self.formatters:
            if formatter.supports(path):
                return formatter if formatter.is_initialized() else None
        return None

    def process(
        self,
        path: Path,
        *,
        sequence: int | None = None,
        total: int | None = None,
    ) -> FileResult:
        """Format ``path`` in place when its canonical form differs.

        Raises:
            OSError: If the file cannot be read.
            UnicodeError: If the content does not decode under the run encoding.
        """

        key = cache_key(path, self.base_dir)
        source = read_text(path, self.encoding)
        ctx = _FileContext(
            path=path,
            original_digest=compute_digest(source, self.encoding),
            sequence=sequence,
            total=total,
        )

        log_event(
            logging.DEBUG,
            ProcessingEvent.FILE_START,
            "Processing file [path=%s, digest=%s]",
            path,
            ctx.original_digest[:12],
            source_path=path,
            base_dir=self.base_dir,
            sequence=sequence,
            total_files=total,
        )

        if self.cache.get(key) == ctx.original_digest:
            return self._finish(
                ctx, FormatOutcome.SKIPPED, ProcessingEvent.FILE_SKIP_CACHED, reason="already formatted"
            )

        formatter = self.select_formatter(path)
        if formatter is None:
            return self._finish(
                ctx,
                FormatOutcome.SKIPPED,
                ProcessingEvent.FILE_SKIP_UNSUPPORTED,
                reason="no initialized formatter",
            )

        request = FormatRequest(
            path=path,
            key=key,
            formatter=formatter,
            line_ending=self.line_ending,
            encoding=self.encoding,
        )
        return self._dispatch(ctx, request, source)

    def _dispatch(self, ctx: _FileContext, request: FormatRequest, source: str) -> FileResult:
        name = request.formatter.name
        try:
            formatted = request.formatter.format(source, request.line_ending)
        except FormatError as exc:
            return self._finish(
                ctx, FormatOutcome.FAIL, ProcessingEvent.FILE_ERROR, reason=str(exc), formatter=name
            )

        if formatted is None:
            self._advance(request.key, ctx.original_digest)
            return self._finish(
                ctx,
                FormatOutcome.SKIPPED,
                ProcessingEvent.FILE_SKIP_UNCHANGED,
                reason="already canonical",
                formatter=name,
            )

        formatted_digest = compute_digest(formatted, request.encoding)
        if formatted_digest == ctx.original_digest:
            self._advance(request.key, ctx.original_digest)
            return self._finish(
                ctx,
                FormatOutcome.SKIPPED,
                ProcessingEvent.FILE_SKIP_UNCHANGED,
                reason="equal digest, not writing",
                formatter=name,
            )

        if not self.dry_run:
            try:
                atomic_write_text(request.path, formatted, request.encoding)
            except (OSError, UnicodeError) as exc:
                return self._finish(
                    ctx,
                    FormatOutcome.FAIL,
                    ProcessingEvent.FILE_ERROR,
                    reason=f"cannot write file: {exc}",
                    formatter=name,
                    formatted_digest=formatted_digest,
                )
            self.cache.put(request.key, formatted_digest)

        return self._finish(
            ctx,
            FormatOutcome.SUCCESS,
            ProcessingEvent.FILE_SUCCESS,
            formatter=name,
            formatted_digest=formatted_digest,
            would_change=True,
        )

    def _advance(self, key: str, digest: str) -> None:
        if not self.dry_run:
            self.cache.put(key, digest)

    def _finish(
        self,
        ctx: _FileContext,
        outcome: FormatOutcome,
        event: ProcessingEvent,
        *,
        reason: str | None = None,
        formatter: str | None = None,
        formatted_digest: str | None = None,
        would_change: bool = False,
    ) -> FileResult:
        duration_ms = round((time.perf_counter() - ctx.start_time) * 1000, 2)
        context: dict[str, Any] = {
            "source_path": ctx.path,
            "base_dir": self.base_dir,
            "sequence": ctx.sequence,
            "total_files": ctx.total,
            "outcome": outcome.value,
            "duration_ms": duration_ms,
        }
        if outcome is FormatOutcome.FAIL:
            context["error_message"] = reason
        log_event(
            _OUTCOME_LEVELS[outcome],
            event,
            "File %s [path=%s, reason=%s, duration_ms=%.2f]",
            outcome.value,
            ctx.path,
            reason or "-",
            duration_ms,
            **context,
        )
        return FileResult(
            path=ctx.path,
            outcome=outcome,
            event=event,
            reason=reason,
            original_digest=ctx.original_digest,
            formatted_digest=formatted_digest,
            formatter=formatter,
            would_change=would_change,
            duration_ms=duration_ms,
        )


__all__ = ["FileProcessor", "FormatRequest"]
