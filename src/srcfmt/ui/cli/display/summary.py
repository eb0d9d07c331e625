"""Utilities for rendering the end-of-run summary."""

from __future__ import annotations

from rich.console import Console

from srcfmt.features.formatting.domain.processing_types import RunStatistics


def render_run_summary(
    console: Console,
    stats: RunStatistics,
    header_label: str,
    success_label: str,
) -> None:
    """Render the outcome counters of a formatting run.

    Args:
        console: Rich console instance used to render output.
        stats: Statistics of the finished run.
        header_label: Label rendered in the summary header.
        success_label: Label describing the count of rewritten files.
    """
    console.print(f"\n[bold]{header_label}:[/bold]")
    console.print(f"Processed {stats.total} files")
    console.print(f"[green]{success_label}: {stats.success_count}[/green]")
    console.print(f"Skipped: {stats.skipped_count}")
    if stats.read_only_count:
        console.print(f"[yellow]Read-only: {stats.read_only_count}[/yellow]")
    console.print(f"Approximate time taken: {stats.duration_seconds():.3f}s")

    if not stats.cache_persisted:
        console.print("[yellow]Hash cache could not be written; the next run formats again[/yellow]")

    if not stats.failed_files:
        return

    console.print(f"[red]Failed: {stats.fail_count}[/red]")
    for failed in stats.failed_files:
        console.print(f"[red]  • {failed.path}: {failed.reason}[/red]")
