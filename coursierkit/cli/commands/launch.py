"""
Launch command implementation.

Runs an application through cs launch.
"""

import logging

from coursierkit.cli.utils import create_runner, load_settings_from_args
from coursierkit.core.types import NonEmptyString
from coursierkit.coursier.launcher import CoursierLauncher

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the launch command.

    Args:
        args: Parsed command-line arguments (app, app_version, app_args)

    Returns:
        Exit code (0 for success)
    """
    settings = load_settings_from_args(args)
    launcher = CoursierLauncher(create_runner(settings), settings.repository)
    launcher.launch(
        args.app,
        NonEmptyString.parse(args.app_version),
        args.app_args,
    )
    return 0
