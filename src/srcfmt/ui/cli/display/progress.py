"""Progress display functionality for CLI."""

from pathlib import Path
from typing import Any, Protocol, final, runtime_checkable

from rich.console import Console
from rich.progress import Progress, TaskID

from srcfmt.application.services.format_service import FormatRunRequest
from srcfmt.features.formatting.domain.processing_types import RunStatistics
from srcfmt.features.formatting.usecases.run_orchestrator import ProgressCallback
from srcfmt.platform.logging import FormatterRichHandler, logger


@runtime_checkable
class FormatServiceLike(Protocol):
    """Protocol for application services that can run a formatting request."""

    def run(
        self,
        request: FormatRunRequest,
        progress_callback: ProgressCallback | None = None,
    ) -> RunStatistics | None:
        ...


@final
class ProgressDisplay:
    """Handles progress display in CLI."""

    def run_with_service(
        self,
        app: FormatServiceLike,
        request: FormatRunRequest,
        *,
        quiet: bool = False,
    ) -> RunStatistics | None:
        """Run formatting via the application service with a progress bar.

        Args:
            app: Application service instance used to orchestrate the run.
            request: Formatting run parameters.
            quiet: Run without rendering a progress bar.

        Returns:
            Run statistics, or ``None`` when formatting is skipped.
        """
        if quiet:
            return app.run(request)

        progress_console: Console | None = None
        for handler in logger.handlers:
            if isinstance(handler, FormatterRichHandler):
                progress_console = handler.console
                break

        progress_kwargs: dict[str, Any] = {
            "transient": True,
            "redirect_stdout": False,
            "redirect_stderr": False,
        }
        if progress_console is not None:
            progress_kwargs["console"] = progress_console

        label = "Checking files" if request.dry_run else "Formatting files"
        with Progress(**progress_kwargs) as progress:
            task_id: TaskID | None = None
            last_count = 0

            def _cb(processed: int, total: int, current_file: Path) -> None:
                nonlocal task_id, last_count
                _ = current_file  # consumed via logging elsewhere
                if task_id is None:
                    task_id = progress.add_task(f"[cyan]{label}...", total=total)
                advance = max(processed - last_count, 0)
                progress.update(
                    task_id,
                    advance=advance,
                    description=f"[cyan]{label}... {processed}/{total}",
                )
                last_count = processed

            return app.run(request, _cb)
