"""Removal of the Coursier cache and every installed binary."""

import logging
from pathlib import Path
from typing import Optional

from coursierkit.config.settings import CoursierSettings
from coursierkit.core.exceptions import CoursierKitError
from coursierkit.core.filesystem import FilesystemError, remove_path
from coursierkit.core.process import ProcessRunner

logger = logging.getLogger(__name__)


def _remove(path: Path) -> None:
    try:
        remove_path(path)
    except FilesystemError as e:
        logger.debug(str(e))


def remove(settings: CoursierSettings, runner: Optional[ProcessRunner] = None) -> None:
    """
    Remove the Coursier cache, everything ``cs`` installed and ``cs`` itself.

    Best effort: missing paths are skipped and failures are only logged at
    debug level, so this is safe to call at the end of every run.
    """
    if runner is None:
        runner = ProcessRunner([settings.bin_dir])

    _remove(settings.cache_dir)

    try:
        runner.run(
            "cs",
            ["uninstall", "--all"],
            on_stdout=logger.debug,
            on_stderr=logger.debug,
        )
    except CoursierKitError as e:
        logger.debug(str(e))

    for binary in settings.installed_binaries:
        _remove(binary)
