"""
Shared utilities for CLI commands.

Each CLI command runs in its own process (usually its own workflow step),
so commands rebuild settings and the process runner from scratch.
"""

import logging
from typing import Optional

from coursierkit.config.settings import CoursierSettings, load_settings
from coursierkit.core.exceptions import CoursierKitError
from coursierkit.core.process import ProcessRunner

logger = logging.getLogger(__name__)


def load_settings_from_args(args) -> CoursierSettings:
    """
    Resolve settings for a command.

    Args:
        args: Parsed arguments (uses ``args.config`` when present)

    Raises:
        ConfigError: If the configuration is invalid
    """
    return load_settings(getattr(args, "config", None))


def try_load_settings(args, warning: str) -> Optional[CoursierSettings]:
    """
    Resolve settings for a command that must not fail the step.

    Args:
        args: Parsed arguments
        warning: Message logged when the settings can't be loaded

    Returns:
        Settings, or None if the configuration is invalid
    """
    try:
        return load_settings_from_args(args)
    except CoursierKitError as e:
        logger.debug(str(e))
        logger.warning(warning)
        return None


def create_runner(settings: CoursierSettings) -> ProcessRunner:
    """
    Create a process runner that finds tools installed by an earlier step.
    """
    return ProcessRunner([settings.bin_dir])
