"""
coursierkit CLI argument parser.

This module implements the command-line interface for coursierkit using
argparse. Each workflow step calls one command:

    coursierkit restore-cache "$HASH"
    coursierkit install
    coursierkit launch scalafmt -- --check
    coursierkit save-cache "$HASH"
    coursierkit remove
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from coursierkit import __version__
from coursierkit.actions.core import configure_logging
from coursierkit.core.exceptions import CoursierKitError

logger = logging.getLogger(__name__)


class CLI:
    """coursierkit command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="coursierkit",
            description="coursierkit - Coursier installer and launcher for CI",
            epilog='Use "coursierkit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"coursierkit {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./coursierkit.yaml)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_install_command(subparsers)
        self._add_launch_command(subparsers)
        self._add_cache_commands(subparsers)
        self._add_remove_command(subparsers)

        return parser

    def _add_install_command(self, subparsers):
        """Add 'install' subcommand."""
        subparsers.add_parser(
            "install",
            help="Install coursier, the JVM and managed apps",
            description="Download cs and run cs setup for the configured JVM and apps",
        )

    def _add_launch_command(self, subparsers):
        """Add 'launch' subcommand."""
        parser = subparsers.add_parser(
            "launch",
            help="Launch an application through coursier",
            description="Run an application with cs launch",
        )
        parser.add_argument("app", help="Application artifact name (e.g. scalafmt)")
        parser.add_argument(
            "--app-version",
            metavar="VERSION",
            help="Application version (default: latest)",
        )
        parser.add_argument(
            "app_args",
            nargs="*",
            metavar="ARG",
            help="Arguments passed to the application (put them after --)",
        )

    def _add_cache_commands(self, subparsers):
        """Add 'restore-cache' and 'save-cache' subcommands."""
        restore_parser = subparsers.add_parser(
            "restore-cache",
            help="Restore the coursier cache",
            description="Restore ~/.cache/coursier/v1 from the cache store",
        )
        restore_parser.add_argument("hash", help="Hash of the build's dependencies")

        save_parser = subparsers.add_parser(
            "save-cache",
            help="Save the coursier cache",
            description="Save ~/.cache/coursier/v1 to the cache store",
        )
        save_parser.add_argument("hash", help="Hash of the build's dependencies")

    def _add_remove_command(self, subparsers):
        """Add 'remove' subcommand."""
        subparsers.add_parser(
            "remove",
            help="Remove coursier, managed apps and the cache",
            description="Best-effort removal of everything install created",
        )

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with arguments.

        Args:
            args: Command-line arguments (default: sys.argv[1:])

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parser.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130
        except CoursierKitError as e:
            logger.error(str(e))
            return 1
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        configure_logging(level=level, format_str=format_str)

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        command_map = {
            "install": ("coursierkit.cli.commands.install", "run"),
            "launch": ("coursierkit.cli.commands.launch", "run"),
            "restore-cache": ("coursierkit.cli.commands.cache", "run_restore"),
            "save-cache": ("coursierkit.cli.commands.cache", "run_save"),
            "remove": ("coursierkit.cli.commands.remove", "run"),
        }

        target = command_map.get(args.command)
        if not target:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module_name, function_name = target
        module = importlib.import_module(module_name)
        return getattr(module, function_name)(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
