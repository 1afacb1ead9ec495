"""
Centralized exception hierarchy for coursierkit.

Install and launch failures are fatal for the surrounding workflow step,
cache failures never are. The messages follow that split: installation
errors stay generic, launch errors name the qualified application and
process errors carry the full command line.
"""

from typing import Sequence


# ============================================================================
# Base Exceptions
# ============================================================================


class CoursierKitError(Exception):
    """Base exception for all coursierkit errors."""

    pass


class ConfigError(CoursierKitError):
    """Configuration loading or validation error."""

    pass


# ============================================================================
# Process Exceptions
# ============================================================================


class ProcessExecutionError(CoursierKitError):
    """Raised when an external program exits with a non-zero code or cannot start."""

    def __init__(self, tool: str, args: Sequence[str] = (), returncode: int = -1):
        self.tool = tool
        self.args_list = list(args)
        self.returncode = returncode
        super().__init__(
            f"There was an error while executing '{self.command_line}'"
        )

    @property
    def command_line(self) -> str:
        """The invoked program followed by all of its arguments."""
        return " ".join([self.tool, *self.args_list])


# ============================================================================
# Coursier Exceptions
# ============================================================================


class InstallationError(CoursierKitError):
    """Raised when Coursier or one of its managed tools could not be installed."""

    def __init__(self, message: str = "Unable to install coursier or managed tools"):
        super().__init__(message)


class LaunchError(CoursierKitError):
    """Raised when an application launched through Coursier fails."""

    def __init__(self, qualified_name: str):
        self.qualified_name = qualified_name
        super().__init__(f"Launching {qualified_name} failed")


# ============================================================================
# Cache Exceptions
# ============================================================================


class CacheError(CoursierKitError):
    """Raised by cache stores when an entry cannot be restored or saved."""

    pass
