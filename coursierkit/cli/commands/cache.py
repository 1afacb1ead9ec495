"""
Cache command implementations.

Restore and save never fail the step: problems end up as warnings.
"""

from coursierkit.caching.manager import restore_cache, save_cache
from coursierkit.cli.utils import try_load_settings


def run_restore(args) -> int:
    """Run the restore-cache command. Always returns 0."""
    settings = try_load_settings(args, "Unable to restore Coursier's cache")
    if settings is not None:
        restore_cache(settings, args.hash)
    return 0


def run_save(args) -> int:
    """Run the save-cache command. Always returns 0."""
    settings = try_load_settings(args, "Unable to save Coursier's cache")
    if settings is not None:
        save_cache(settings, args.hash)
    return 0
