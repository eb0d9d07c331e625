"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final

from srcfmt.features.formatting.domain.line_ending import LineEnding


@final
@dataclass(slots=True)
class FormatArgs:
    """Command line arguments for the ``format`` or ``check`` subcommands."""

    command: Literal["format", "check"]
    paths: tuple[Path, ...]
    base_dir: Path
    config_path: Path | None
    line_ending: LineEnding | None
    encoding: str | None
    workers: int | None
    dry_run: bool
    clear_cache: bool
    verbose: bool
    quiet: bool
    log_level: int


CLIArgs = FormatArgs

__all__ = ["CLIArgs", "FormatArgs"]
