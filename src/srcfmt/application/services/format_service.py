"""Application service for formatting source trees.

This layer turns a ``FormatterConfig`` into initialized formatters, a list of
candidate files and a ``RunOrchestrator`` so that every UI runs the same
pipeline.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import final

from srcfmt.config.config import FormatterConfig
from srcfmt.config.import_order import resolve_import_order
from srcfmt.config.options_loader import load_formatter_options
from srcfmt.features.formatting.domain.errors import ConfigError
from srcfmt.features.formatting.domain.processing_types import ProcessingEvent, RunStatistics
from srcfmt.features.formatting.engines.base import BaseFormatter, FormatterSettings
from srcfmt.features.formatting.engines.java import JavaFormatter
from srcfmt.features.formatting.engines.javascript import JavascriptFormatter
from srcfmt.features.formatting.usecases.discovery import collect_candidate_files
from srcfmt.features.formatting.usecases.event_logging import log_event
from srcfmt.features.formatting.usecases.run_orchestrator import (
    ProgressCallback,
    RunOrchestrator,
)
from srcfmt.platform.logging import logger


@dataclass(frozen=True)
class FormatRunRequest:
    """Input parameters for one formatting run.

    Attributes:
        config: Effective configuration after CLI overrides.
        paths: Explicit files or directories; the configured directories
            are scanned when empty.
        dry_run: Compute formatting without writing files or the cache.
        clear_cache: Ignore the stored digests and start from an empty cache.
    """

    config: FormatterConfig
    paths: tuple[Path, ...] = field(default_factory=tuple)
    dry_run: bool = False
    clear_cache: bool = False


@final
class FormatService:
    """Application service that wires configuration to the formatting pipeline."""

    def __init__(
        self,
        *,
        java_factory: Callable[[], JavaFormatter] | None = None,
        javascript_factory: Callable[[], JavascriptFormatter] | None = None,
        orchestrator_factory: Callable[..., RunOrchestrator] | None = None,
    ) -> None:
        """Create a service with overridable formatter and orchestrator factories."""

        self._java_factory: Callable[[], JavaFormatter] = java_factory or JavaFormatter
        self._javascript_factory: Callable[[], JavascriptFormatter] = (
            javascript_factory or JavascriptFormatter
        )
        self._orchestrator_factory: Callable[..., RunOrchestrator] = (
            orchestrator_factory or RunOrchestrator
        )

    def build_formatters(self, config: FormatterConfig) -> list[BaseFormatter]:
        """Create and initialize the Java and JavaScript formatters.

        A formatter whose configured option file does not exist stays
        uninitialized and its files are skipped.

        Raises:
            ConfigError: If no formatter could be initialized, or an option
                or import order file is invalid.
        """
        settings = config.formatter_settings()
        base_dir = config.project_dir

        java = self._java_factory()
        self._initialize(java, config.config_file, base_dir, settings)
        if java.is_initialized():
            try:
                import_order = resolve_import_order(config.import_order_file, base_dir)
            except OSError as exc:
                raise ConfigError(str(exc)) from exc
            java.set_import_order(import_order, config.unmatched_imports)

        javascript = self._javascript_factory()
        self._initialize(javascript, config.config_js_file, base_dir, settings)

        formatters: list[BaseFormatter] = [java, javascript]
        if not any(formatter.is_initialized() for formatter in formatters):
            raise ConfigError("You must provide a Java or Javascript configuration file.")
        return formatters

    @staticmethod
    def _initialize(
        formatter: BaseFormatter,
        config_file: Path | None,
        base_dir: Path,
        settings: FormatterSettings,
    ) -> None:
        options = load_formatter_options(config_file, base_dir)
        if options is None:
            logger.warning(
                "Config file for the %s formatter cannot be found; %s files will be skipped",
                formatter.name,
                formatter.name,
            )
            return
        formatter.initialize(options, settings)

    def discover(self, request: FormatRunRequest) -> list[Path]:
        """Return the candidate files for ``request``."""

        config = request.config
        roots: Sequence[Path] = (
            [config.resolve(path) for path in request.paths]
            if request.paths
            else config.source_directories()
        )
        return collect_candidate_files(roots, config.includes, config.excludes)

    def run(
        self,
        request: FormatRunRequest,
        progress_callback: ProgressCallback | None = None,
    ) -> RunStatistics | None:
        """Format the files selected by ``request``.

        Returns:
            The run statistics, or ``None`` when formatting is skipped.

        Raises:
            ConfigError: If the configuration cannot produce a valid run.
        """
        config = request.config
        if config.skip:
            log_event(logging.INFO, ProcessingEvent.RUN_SKIPPED, "Formatting is skipped")
            return None

        files = self.discover(request)
        if not files:
            stats = RunStatistics(dry_run=request.dry_run)
            stats.finish()
            log_event(
                logging.INFO,
                ProcessingEvent.RUN_NO_FILES,
                "No files to be formatted",
                **stats.summary_extra(),
            )
            return stats

        encoding = config.resolve_encoding()
        formatters = self.build_formatters(config)
        orchestrator = self._orchestrator_factory(
            formatters,
            config.cache_store,
            base_dir=config.project_dir,
            encoding=encoding,
            line_ending=config.line_ending,
            workers=config.workers,
            dry_run=request.dry_run,
            clear_cache=request.clear_cache,
            progress_callback=progress_callback,
        )
        return orchestrator.run(files)


__all__ = ["FormatRunRequest", "FormatService"]
