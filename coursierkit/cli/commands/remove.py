"""
Remove command implementation.

Cleans up everything install created; never fails the step.
"""

from coursierkit.cli.utils import create_runner, try_load_settings
from coursierkit.coursier.remover import remove


def run(args) -> int:
    """
    Run the remove command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (always 0)
    """
    settings = try_load_settings(args, "Unable to remove coursier")
    if settings is not None:
        remove(settings, create_runner(settings))
    return 0
