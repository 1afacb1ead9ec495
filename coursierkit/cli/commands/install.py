"""
Install command implementation.

Installs coursier, the managed JVM and the configured apps.
"""

import logging

from coursierkit.cli.utils import create_runner, load_settings_from_args
from coursierkit.coursier.installer import CoursierInstaller

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the install command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    settings = load_settings_from_args(args)
    installation = CoursierInstaller(settings, create_runner(settings)).install()
    logger.debug(f"Installed into {installation.bin_dir}")
    return 0
