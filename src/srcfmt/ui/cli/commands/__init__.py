"""Command execution package for CLI."""

from srcfmt.ui.cli.commands.executor import CommandExecutor
from srcfmt.ui.cli.commands.format import CheckCommand, FormatCommand

__all__ = ["CommandExecutor", "CheckCommand", "FormatCommand"]
