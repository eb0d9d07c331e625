"""src/srcfmt/ui/cli/commands/executor.py
What: Provide shared wiring for CLI command executors.
Why: Resolve configuration and logging once before any command runs.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from srcfmt.application.services.format_service import FormatRunRequest, FormatService
from srcfmt.config.config import FormatterConfig
from srcfmt.config.paths import default_log_file, log_file_override
from srcfmt.features.formatting.domain.processing_types import RunStatistics
from srcfmt.platform.logging import setup_logger
from srcfmt.ui.cli.args.options import FormatArgs
from srcfmt.ui.cli.display.progress import ProgressDisplay
from srcfmt.ui.cli.display.result import ResultDisplay


class CommandExecutor(ABC):
    """Base class for command execution."""

    args: FormatArgs
    config: FormatterConfig
    app: FormatService
    request: FormatRunRequest
    progress_display: ProgressDisplay
    result_display: ResultDisplay

    def __init__(self, args: FormatArgs, app: FormatService | None = None) -> None:
        """Initialize command executor.

        Args:
            args: Command line arguments.
            app: Application service; a default one is created when omitted.

        Raises:
            ConfigError: If the configuration file is missing or invalid.
        """
        self.args = args
        self.config = FormatterConfig.load(args.config_path, args.base_dir).with_overrides(
            line_ending=args.line_ending,
            encoding=args.encoding,
            workers=args.workers,
        )

        _ = setup_logger(log_file=self._log_file(), console_level=args.log_level)

        self.app = app or FormatService()
        self.request = FormatRunRequest(
            config=self.config,
            paths=args.paths,
            dry_run=args.dry_run,
            clear_cache=args.clear_cache,
        )
        self.progress_display = ProgressDisplay()
        self.result_display = ResultDisplay()

    def _log_file(self) -> Path | None:
        """Return the log file for this run.

        Dry runs only log to a file that was configured explicitly so that
        they leave the target directory untouched.
        """
        if self.config.log_file is not None:
            return self.config.resolve(self.config.log_file)
        if self.args.dry_run:
            return log_file_override()
        return default_log_file(self.config.target_path)

    @abstractmethod
    def execute(self) -> RunStatistics | None:
        """Execute the command.

        Returns:
            Run statistics, or ``None`` when formatting is skipped.
        """
        pass

    @abstractmethod
    def exit_code(self, stats: RunStatistics | None) -> int:
        """Map the run statistics to a process exit code."""
        pass
