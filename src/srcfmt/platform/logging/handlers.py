"""Rich console handler rendering structured formatting events.

Where: platform/logging/handlers.py
What: Render ``processing_event`` log records as compact, coloured lines.
Why: Keep per-file progress readable when a build formats hundreds of files.
"""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class FormatterRichHandler(RichHandler):
    """Rich handler with dedicated styling for formatting events."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "formatting.run.start": ("🚀", "cyan"),
        "formatting.run.complete": ("✅", "green"),
        "formatting.run.skipped": ("⏭️", "yellow"),
        "formatting.run.no_files": ("ℹ️", "yellow"),
        "formatting.cache.load": ("🗂️", "blue"),
        "formatting.cache.persist": ("💾", "blue"),
        "formatting.cache.persist_error": ("⚠️", "yellow"),
        "formatting.file.start": ("📝", "blue"),
        "formatting.file.skip.cached": ("♻️", "dim"),
        "formatting.file.skip.unsupported": ("↪️", "yellow"),
        "formatting.file.skip.unchanged": ("✔️", "dim"),
        "formatting.file.success": ("✨", "green"),
        "formatting.file.error": ("⛔", "red"),
        "formatting.file.missing": ("❓", "red"),
        "formatting.file.read_only": ("🔒", "yellow"),
    }
    _EVENT_LABELS: ClassVar[dict[str, str]] = {
        "formatting.file.start": "Formatting ",
        "formatting.file.skip.cached": "Already formatted ",
        "formatting.file.skip.unsupported": "No formatter for ",
        "formatting.file.skip.unchanged": "Unchanged ",
        "formatting.file.success": "Formatted ",
        "formatting.file.error": "Failed ",
        "formatting.file.missing": "Missing ",
        "formatting.file.read_only": "Read-only ",
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 4

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        super().__init__(*args, **kwargs)

    def format_path(self, path: str, base: str | None = None) -> Text:
        """Render ``path`` relative to ``base`` and truncated to a few segments."""

        pure_path = self._to_pure_path(path)
        display_path: PurePath = pure_path
        if base:
            base_path = self._to_pure_path(base)
            try:
                relative = pure_path.relative_to(base_path)
            except ValueError:
                relative = None
            if relative is not None and str(relative) not in {"", "."}:
                display_path = relative

        separator = "\\" if isinstance(display_path, PureWindowsPath) else "/"
        anchor = display_path.anchor
        parts = [part for part in display_path.parts if part and part != anchor]

        truncated = len(parts) > self._PATH_SEGMENT_LIMIT
        if truncated:
            parts = ["…", *parts[-self._PATH_SEGMENT_LIMIT:]]
            anchor = ""

        display = anchor.rstrip("\\/") + separator if anchor else ""
        display += separator.join(parts)

        text = Text()
        for char in display or ".":
            color = "magenta" if char in {separator, "…"} else "white"
            _ = text.append(char, style=Style(color=color))
        return text

    @staticmethod
    def _to_pure_path(raw_path: str) -> PurePath:
        if "\\" in raw_path:
            return PureWindowsPath(raw_path)
        return PurePosixPath(raw_path)

    def _render_run_body(self, event: str, record: logging.LogRecord) -> Text:
        body = Text()
        metrics: list[str] = []
        if event == "formatting.run.start":
            _ = body.append("Run start")
            total = getattr(record, "total_files", None)
            if isinstance(total, int):
                metrics.append(f"files={total}")
            if getattr(record, "dry_run", False):
                metrics.append("dry-run")
        elif event == "formatting.run.complete":
            _ = body.append("Run complete")
            for key in ("success", "failed", "skipped", "read_only"):
                value = getattr(record, key, None)
                if isinstance(value, int):
                    metrics.append(f"{key}={value}")
            duration = getattr(record, "duration_seconds", None)
            if isinstance(duration, (int, float)):
                metrics.append(f"duration={duration:.2f}s")
        else:
            _ = body.append(record.getMessage())
        if metrics:
            _ = body.append(" [" + ", ".join(metrics) + "]")
        return body

    def _render_file_body(self, event: str, record: logging.LogRecord) -> Text:
        body = Text()
        sequence = getattr(record, "sequence", None)
        total = getattr(record, "total_files", None)
        if isinstance(sequence, int) and sequence > 0:
            if isinstance(total, int) and total > 0:
                _ = body.append(f"[{sequence}/{total}] ")
            else:
                _ = body.append(f"[{sequence}] ")

        label = self._EVENT_LABELS.get(event)
        if label:
            _ = body.append(label)

        source_path = getattr(record, "source_path", None)
        if source_path:
            _ = body.append_text(
                self.format_path(str(source_path), base=getattr(record, "base_dir", None))
            )

        details: list[str] = []
        duration_ms = getattr(record, "duration_ms", None)
        if event == "formatting.file.success" and isinstance(duration_ms, (int, float)):
            details.append(f"{duration_ms:.2f} ms")
        error_message = getattr(record, "error_message", None)
        if error_message:
            details.append(str(error_message))
        if details:
            _ = body.append(" (" + ", ".join(details) + ")")
        return body

    def render_event(self, record: logging.LogRecord) -> Text | None:
        """Render a structured event record, or ``None`` for plain records."""

        event = getattr(record, "processing_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        if event.startswith("formatting.file."):
            body = self._render_file_body(event, record)
        else:
            body = self._render_run_body(event, record)
        body.stylize(Style(color=color) if color != "dim" else Style(dim=True))

        text = Text()
        _ = text.append(f"{icon} ", style=Style(bold=True))
        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        rendered = self.render_event(record)
        if rendered is not None:
            return rendered
        return super().render_message(record, message)


__all__ = ["FormatterRichHandler"]
