"""Display management for CLI interface."""

from srcfmt.ui.cli.display.progress import ProgressDisplay
from srcfmt.ui.cli.display.result import ResultDisplay
from srcfmt.ui.cli.display.summary import render_run_summary

__all__ = ["ProgressDisplay", "ResultDisplay", "render_run_summary"]
