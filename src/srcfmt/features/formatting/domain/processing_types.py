"""src/srcfmt/features/formatting/domain/processing_types.py
Where: Formatting feature domain layer.
What: Shared enums and dataclasses for the per-file formatting flow.
Why: Keep the processor and orchestrator lean by centralising type definitions.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any


class FormatOutcome(StrEnum):
    """Terminal outcome of one file in a run."""

    SUCCESS = "success"
    FAIL = "fail"
    SKIPPED = "skipped"
    READ_ONLY = "read_only"


class ProcessingEvent(StrEnum):
    """Structured event identifiers for formatting logs."""

    RUN_START = "formatting.run.start"
    RUN_COMPLETE = "formatting.run.complete"
    RUN_SKIPPED = "formatting.run.skipped"
    RUN_NO_FILES = "formatting.run.no_files"
    CACHE_LOAD = "formatting.cache.load"
    CACHE_PERSIST = "formatting.cache.persist"
    CACHE_PERSIST_ERROR = "formatting.cache.persist_error"
    FILE_START = "formatting.file.start"
    FILE_SKIP_CACHED = "formatting.file.skip.cached"
    FILE_SKIP_UNSUPPORTED = "formatting.file.skip.unsupported"
    FILE_SKIP_UNCHANGED = "formatting.file.skip.unchanged"
    FILE_SUCCESS = "formatting.file.success"
    FILE_ERROR = "formatting.file.error"
    FILE_MISSING = "formatting.file.missing"
    FILE_READ_ONLY = "formatting.file.read_only"


@dataclass(slots=True)
class FileResult:
    """Outcome of running one file through the formatting pipeline."""

    path: Path
    outcome: FormatOutcome
    event: ProcessingEvent
    reason: str | None = None
    original_digest: str | None = None
    formatted_digest: str | None = None
    formatter: str | None = None
    would_change: bool = False
    duration_ms: float = 0.0

    @property
    def success(self) -> bool:
        return self.outcome is FormatOutcome.SUCCESS


@dataclass(slots=True)
class RunStatistics:
    """Counters for a formatting run.

    Each file increments exactly one counter; counters are never decremented.
    """

    success_count: int = 0
    fail_count: int = 0
    skipped_count: int = 0
    read_only_count: int = 0
    cache_persisted: bool = True
    dry_run: bool = False
    failed_files: list[FileResult] = field(default_factory=list)
    changed_files: list[Path] = field(default_factory=list)
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None

    def record(self, result: FileResult) -> None:
        """Fold a per-file result into the counters."""

        match result.outcome:
            case FormatOutcome.SUCCESS:
                self.success_count += 1
                self.changed_files.append(result.path)
            case FormatOutcome.FAIL:
                self.fail_count += 1
                self.failed_files.append(result)
            case FormatOutcome.SKIPPED:
                self.skipped_count += 1
            case FormatOutcome.READ_ONLY:
                self.read_only_count += 1

    @property
    def total(self) -> int:
        return self.success_count + self.fail_count + self.skipped_count + self.read_only_count

    def finish(self) -> None:
        """Freeze the elapsed time of the run."""

        self.end_time = time.perf_counter()

    def duration_seconds(self) -> float:
        """Return the elapsed run time in seconds."""

        end = self.end_time if self.end_time is not None else time.perf_counter()
        return end - self.start_time

    def summary_extra(self) -> dict[str, Any]:
        """Return a dictionary suitable for structured logging extras."""

        return {
            "total_files": self.total,
            "success": self.success_count,
            "failed": self.fail_count,
            "skipped": self.skipped_count,
            "read_only": self.read_only_count,
            "cache_persisted": self.cache_persisted,
            "dry_run": self.dry_run,
            "duration_seconds": round(self.duration_seconds(), 4),
        }


__all__ = ["FormatOutcome", "ProcessingEvent", "FileResult", "RunStatistics"]
