"""src/srcfmt/features/formatting/usecases/run_orchestrator.py
What: Run-wide coordination: preconditions, per-file dispatch, statistics, cache persistence.
Why: Keep one owner for the hash cache and the run counters.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from srcfmt.platform.filesystem import is_writable

from ..domain.errors import CachePersistError, ConfigError
from ..domain.line_ending import LineEnding
from ..domain.processing_types import FileResult, FormatOutcome, ProcessingEvent, RunStatistics
from .event_logging import log_event
from .file_processor import FileProcessor
from .hash_cache import HashCache
from .ports import Formatter

ProgressCallback = Callable[[int, int, Path], None]


def deduplicate(paths: Iterable[Path]) -> list[Path]:
    """Drop repeated paths (by resolved location) keeping the first occurrence."""

    seen: set[Path] = set()
    unique: list[Path] = []
    for path in paths:
        resolved = path.resolve()
        if resolved in seen:
            continue
        seen.add(resolved)
        unique.append(path)
    return unique


class RunOrchestrator:
    """Format a list of candidate files and persist the hash cache once.

    The cache is loaded before the first file and written after the last,
    including when individual files fail. With ``workers > 1`` files are
    processed on a thread pool; cache writes and counter updates are
    serialized and the cache is persisted only after every worker finished.
    """

    def __init__(
        self,
        formatters: Sequence[Formatter],
        cache_store: Path,
        *,
        base_dir: Path,
        encoding: str,
        line_ending: LineEnding,
        workers: int = 1,
        dry_run: bool = False,
        clear_cache: bool = False,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        if workers < 1:
            raise ConfigError(f"workers must be at least 1, got {workers}")
        self.formatters: tuple[Formatter, ...] = tuple(formatters)
        self.cache_store: Path = cache_store
        self.base_dir: Path = base_dir
        self.encoding: str = encoding
        self.line_ending: LineEnding = line_ending
        self.workers: int = workers
        self.dry_run: bool = dry_run
        self.clear_cache: bool = clear_cache
        self.progress_callback: ProgressCallback | None = progress_callback
        self._lock: threading.Lock = threading.Lock()

    def ensure_formatters(self) -> None:
        """Raise ConfigError unless at least one formatter is initialized."""

        if not any(formatter.is_initialized() for formatter in self.formatters):
            raise ConfigError("You must provide a Java or Javascript configuration file.")

    def run(self, candidate_files: Sequence[Path]) -> RunStatistics:
        """Process ``candidate_files`` and return the run statistics.

        Raises:
            ConfigError: If no formatter is initialized; no file is touched.
        """

        self.ensure_formatters()

        files = deduplicate(candidate_files)
        total = len(files)
        stats = RunStatistics(dry_run=self.dry_run)

        log_event(
            logging.INFO,
            ProcessingEvent.RUN_START,
            "Number of files to be formatted: %d",
            total,
            total_files=total,
            dry_run=self.dry_run,
        )

        cache = (
            HashCache()
            if self.clear_cache
            else HashCache.load(self.cache_store, create_directory=not self.dry_run)
        )
        processor = FileProcessor(
            self.formatters,
            cache,
            base_dir=self.base_dir,
            encoding=self.encoding,
            line_ending=self.line_ending,
            dry_run=self.dry_run,
        )
        processed = 0

        def handle(sequence: int, path: Path) -> None:
            nonlocal processed
            result = self._process_one(processor, path, sequence, total)
            with self._lock:
                stats.record(result)
                processed += 1
                if self.progress_callback is not None:
                    self.progress_callback(processed, total, path)

        try:
            if self.workers > 1 and total > 1:
                with ThreadPoolExecutor(max_workers=self.workers) as executor:
                    futures = [
                        executor.submit(handle, sequence, path)
                        for sequence, path in enumerate(files, start=1)
                    ]
                    for future in futures:
                        future.result()
            else:
                for sequence, path in enumerate(files, start=1):
                    handle(sequence, path)
        finally:
            if not self.dry_run:
                stats.cache_persisted = self._persist(cache)
            stats.finish()

        log_event(
            logging.INFO,
            ProcessingEvent.RUN_COMPLETE,
            "Formatting run complete [success=%d, failed=%d, skipped=%d, read_only=%d]",
            stats.success_count,
            stats.fail_count,
            stats.skipped_count,
            stats.read_only_count,
            **stats.summary_extra(),
        )
        return stats

    def _process_one(
        self, processor: FileProcessor, path: Path, sequence: int, total: int
    ) -> FileResult:
        if not path.exists():
            return self._precondition(
                path, FormatOutcome.FAIL, ProcessingEvent.FILE_MISSING, "file does not exist", sequence, total
            )
        if not is_writable(path):
            return self._precondition(
                path, FormatOutcome.READ_ONLY, ProcessingEvent.FILE_READ_ONLY, "file is read-only", sequence, total
            )

        try:
            return processor.process(path, sequence=sequence, total=total)
        except (OSError, UnicodeError) as exc:
            return self._precondition(
                path, FormatOutcome.FAIL, ProcessingEvent.FILE_ERROR, f"cannot read file: {exc}", sequence, total
            )

    def _precondition(
        self,
        path: Path,
        outcome: FormatOutcome,
        event: ProcessingEvent,
        reason: str,
        sequence: int,
        total: int,
    ) -> FileResult:
        log_event(
            logging.WARNING if outcome is FormatOutcome.FAIL else logging.INFO,
            event,
            "File %s [path=%s, reason=%s]",
            outcome.value,
            path,
            reason,
            source_path=path,
            base_dir=self.base_dir,
            sequence=sequence,
            total_files=total,
            error_message=reason if outcome is FormatOutcome.FAIL else None,
        )
        return FileResult(path=path, outcome=outcome, event=event, reason=reason)

    def _persist(self, cache: HashCache) -> bool:
        try:
            cache.persist(self.cache_store)
        except CachePersistError as exc:
            log_event(
                logging.WARNING,
                ProcessingEvent.CACHE_PERSIST_ERROR,
                "%s",
                exc,
                source_path=self.cache_store,
            )
            return False
        log_event(
            logging.DEBUG,
            ProcessingEvent.CACHE_PERSIST,
            "Stored %d digests in %s",
            len(cache),
            self.cache_store,
            source_path=self.cache_store,
        )
        return True


__all__ = ["RunOrchestrator", "ProgressCallback", "deduplicate"]
