"""
GitHub Actions runner integration.

Reads action inputs, renders log records as workflow commands and exports
directories to the ``PATH`` of later workflow steps.

Usage:
    from coursierkit.actions import core

    url = core.get_input("coursier-cli-url", required=True)

    with core.group("Launching scalafmt"):
        logger.info("...")
"""

import logging
import os
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Mapping, Optional, TextIO, Union

from coursierkit.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

_COMMAND_PREFIXES = {
    logging.DEBUG: "::debug::",
    logging.WARNING: "::warning::",
    logging.ERROR: "::error::",
    logging.CRITICAL: "::error::",
}


def is_github_actions(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Return True when running inside a GitHub Actions job."""
    environ = os.environ if environ is None else environ
    return environ.get("GITHUB_ACTIONS", "").lower() == "true"


def input_variable(name: str) -> str:
    """Environment variable GitHub uses for action input ``name``."""
    return "INPUT_" + name.replace(" ", "_").upper()


def get_input(
    name: str,
    required: bool = False,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Get the value of an action input.

    Args:
        name: Input name as declared in action.yml (e.g. ``coursier-cli-url``)
        required: Raise if the input is missing or blank
        environ: Environment to read from (default: os.environ)

    Returns:
        The input value with surrounding whitespace removed, or "" if unset

    Raises:
        ConfigError: If the input is required and not supplied
    """
    environ = os.environ if environ is None else environ
    value = environ.get(input_variable(name), "").strip()

    if required and not value:
        raise ConfigError(f"Input required and not supplied: {name}")

    return value


def _escape_data(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionsFormatter(logging.Formatter):
    """Formats records as GitHub workflow commands (``::warning::...``)."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        prefix = _COMMAND_PREFIXES.get(record.levelno)
        if prefix is None:
            return message
        return prefix + _escape_data(message)


def configure_logging(
    level: int = logging.INFO,
    format_str: str = "%(message)s",
    environ: Optional[Mapping[str, str]] = None,
) -> None:
    """
    Configure root logging for a coursierkit run.

    Inside GitHub Actions debug records are emitted as ``::debug::`` commands
    unless only errors were requested; the runner hides them unless step
    debugging is enabled.
    """
    if is_github_actions(environ):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(ActionsFormatter(format_str))
        if level <= logging.INFO:
            level = logging.DEBUG
        logging.basicConfig(level=level, handlers=[handler], force=True)
    else:
        logging.basicConfig(level=level, format=format_str, force=True)


@contextmanager
def group(title: str, stream: Optional[TextIO] = None):
    """
    Wrap the enclosed log output in a collapsible group.

    Outside GitHub Actions the group is reduced to a heading line.
    """
    if is_github_actions():
        out = stream or sys.stdout
        out.write(f"::group::{title}\n")
        out.flush()
        try:
            yield
        finally:
            out.write("::endgroup::\n")
            out.flush()
    else:
        logger.info(title)
        yield


def add_path(
    directory: Union[str, Path], environ: Optional[Mapping[str, str]] = None
) -> bool:
    """
    Make ``directory`` part of the ``PATH`` of later workflow steps.

    Appends the directory to the file named by ``GITHUB_PATH``.

    Returns:
        True if the directory was exported, False when not running in Actions
    """
    environ = os.environ if environ is None else environ
    path_file = environ.get("GITHUB_PATH")

    if not path_file:
        logger.debug(f"GITHUB_PATH not set, {directory} not exported")
        return False

    with open(path_file, "a", encoding="utf-8") as f:
        f.write(f"{directory}\n")

    logger.debug(f"Exported {directory} to GITHUB_PATH")
    return True
