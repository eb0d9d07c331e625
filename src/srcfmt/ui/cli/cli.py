"""Command line interface for srcfmt."""

from typing import final

from srcfmt.features.formatting.domain.errors import ConfigError
from srcfmt.platform.logging import logger
from srcfmt.ui.cli.args import ArgumentParser
from srcfmt.ui.cli.args.options import CLIArgs
from srcfmt.ui.cli.commands import CheckCommand, CommandExecutor, FormatCommand

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: list[str] | None = None) -> int:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            int: ``0`` when every file is formatted, ``1`` when a file failed
            (or, for ``check``, would change), ``2`` on a configuration error.
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)

            command: CommandExecutor = (
                CheckCommand(args) if args.command == "check" else FormatCommand(args)
            )
            stats = command.execute()
            return command.exit_code(stats)

        except ConfigError as e:
            logger.error("Configuration error: %s", e)
            return EXIT_CONFIG_ERROR
        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            return EXIT_INTERRUPTED
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            return EXIT_FAILURE


def main(args_list: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        int: Process exit code.
    """
    return CommandProcessor.process_command(args_list)
