"""Command line argument handling package."""

from srcfmt.ui.cli.args.parser import ArgumentParser
from srcfmt.ui.cli.args.options import CLIArgs, FormatArgs

__all__ = ["ArgumentParser", "CLIArgs", "FormatArgs"]
