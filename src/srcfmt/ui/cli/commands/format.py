"""src/srcfmt/ui/cli/commands/format.py
What: Execute format and check runs via the CLI.
Why: Bridge parsed arguments with the application service.
"""

from typing import override

from srcfmt.features.formatting.domain.processing_types import RunStatistics
from srcfmt.ui.cli.commands.executor import CommandExecutor


class FormatCommand(CommandExecutor):
    """Command for formatting files in place."""

    @override
    def execute(self) -> RunStatistics | None:
        stats = self.progress_display.run_with_service(self.app, self.request, quiet=self.args.quiet)
        if stats is None:
            self.result_display.show_skipped(quiet=self.args.quiet)
            return None
        self.result_display.show_results(stats, quiet=self.args.quiet)
        return stats

    @override
    def exit_code(self, stats: RunStatistics | None) -> int:
        if stats is None:
            return 0
        return 1 if stats.fail_count else 0


class CheckCommand(CommandExecutor):
    """Command reporting files that are not yet formatted."""

    @override
    def execute(self) -> RunStatistics | None:
        stats = self.progress_display.run_with_service(self.app, self.request, quiet=self.args.quiet)
        if stats is None:
            self.result_display.show_skipped(quiet=self.args.quiet)
            return None
        self.result_display.show_check(stats, quiet=self.args.quiet)
        return stats

    @override
    def exit_code(self, stats: RunStatistics | None) -> int:
        if stats is None:
            return 0
        return 1 if stats.fail_count or stats.success_count else 0
