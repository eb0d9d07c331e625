"""src/srcfmt/ui/cli/display/result.py
What: Render user-facing summaries for format/check CLI flows.
Why: Keep console output formatting consistent across the interface.
"""

from __future__ import annotations

from typing import final

from rich.console import Console

from srcfmt.features.formatting.domain.processing_types import RunStatistics

from .summary import render_run_summary


@final
class ResultDisplay:
    """Handles result display in CLI."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_results(self, stats: RunStatistics, quiet: bool = False) -> None:
        """Display run statistics.

        Args:
            stats: Statistics of the finished run.
            quiet: Whether to suppress non-error output.
        """
        if quiet:
            return

        render_run_summary(
            console=self.console,
            stats=stats,
            header_label="Formatting Summary",
            success_label="Formatted",
        )

    def show_check(self, stats: RunStatistics, quiet: bool = False) -> None:
        """Display which files a ``check`` run would rewrite."""

        if quiet:
            return

        render_run_summary(
            console=self.console,
            stats=stats,
            header_label="Check Summary",
            success_label="Would reformat",
        )
        for path in stats.changed_files:
            self.console.print(f"[yellow]  • {path}[/yellow]")

    def show_skipped(self, quiet: bool = False) -> None:
        if quiet:
            return
        self.console.print("Formatting is skipped")
