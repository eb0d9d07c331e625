"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from srcfmt.config.paths import detect_project_root
from srcfmt.features.formatting.domain.errors import ConfigError
from srcfmt.features.formatting.domain.line_ending import LineEnding
from srcfmt.platform.logging import logger, setup_logger
from srcfmt.ui.cli.args.options import CLIArgs, FormatArgs


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            prog="srcfmt",
            description="srcfmt - Reformat Java and JavaScript sources, skipping files that did not change.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        format_parser = subparsers.add_parser(
            "format",
            help="Format source files in place",
        )
        ArgumentParser._configure_format_parser(format_parser, dry_run_default=False)

        check_parser = subparsers.add_parser(
            "check",
            help="Report files that would be reformatted without writing them",
        )
        ArgumentParser._configure_format_parser(check_parser, dry_run_default=True)

        return parser

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            Args: Processed command line arguments.

        Raises:
            SystemExit: If the arguments are invalid.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        # Set log level based on verbosity flags
        is_quiet = bool(getattr(parsed_args, "quiet", False))
        is_verbose = bool(getattr(parsed_args, "verbose", False))

        if is_quiet:
            log_level = logging.ERROR
        elif is_verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        _ = setup_logger(console_level=log_level)

        command: str = parsed_args.command

        if command in {"format", "check"}:
            return ArgumentParser._process_format(parser, parsed_args, log_level)

        logger.error("Unsupported command: %s", command)
        sys.exit(2)

    @staticmethod
    def _configure_format_parser(
        parser: argparse.ArgumentParser,
        *,
        dry_run_default: bool,
    ) -> None:
        """Apply shared configuration for format-style subparsers."""

        parser.set_defaults(dry_run=dry_run_default)
        _ = parser.add_argument(
            "paths",
            nargs="*",
            type=str,
            help="Files or directories to format (defaults to the configured directories)",
            metavar="PATH",
        )
        _ = parser.add_argument(
            "--config",
            type=str,
            help="Configuration file (defaults to srcfmt.toml or [tool.srcfmt] in pyproject.toml)",
            metavar="CONFIG_PATH",
        )
        _ = parser.add_argument(
            "--base-dir",
            type=str,
            help="Project base directory (defaults to the detected project root)",
            metavar="BASE_DIR",
        )
        _ = parser.add_argument(
            "--line-ending",
            type=str,
            help="Line ending of rewritten files (auto, keep, lf, crlf, cr)",
            metavar="POLICY",
        )
        _ = parser.add_argument(
            "--encoding",
            type=str,
            help="Source file encoding",
        )
        _ = parser.add_argument(
            "--workers",
            type=int,
            help="Number of files formatted in parallel",
        )
        _ = parser.add_argument(
            "--clear-cache",
            action="store_true",
            help="Ignore stored digests and format every file",
        )
        _ = parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show detailed processing information",
        )
        _ = parser.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

    @staticmethod
    def _process_format(
        parser: argparse.ArgumentParser,
        parsed_args: argparse.Namespace,
        log_level: int,
    ) -> FormatArgs:
        if parsed_args.base_dir:
            base_dir = Path(parsed_args.base_dir).expanduser().resolve()
            if not base_dir.is_dir():
                parser.error(f"Base directory does not exist: {base_dir}")
        else:
            base_dir = detect_project_root()

        line_ending: LineEnding | None = None
        if parsed_args.line_ending:
            try:
                line_ending = LineEnding.from_user_input(parsed_args.line_ending)
            except ConfigError as exc:
                parser.error(str(exc))

        workers: int | None = parsed_args.workers
        if workers is not None and workers < 1:
            parser.error(f"Workers must be a positive integer; received {workers}")

        return FormatArgs(
            command=parsed_args.command,
            paths=tuple(Path(path).expanduser().resolve() for path in parsed_args.paths),
            base_dir=base_dir,
            config_path=Path(parsed_args.config) if parsed_args.config else None,
            line_ending=line_ending,
            encoding=parsed_args.encoding,
            workers=workers,
            dry_run=parsed_args.dry_run,
            clear_cache=parsed_args.clear_cache,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
            log_level=log_level,
        )
