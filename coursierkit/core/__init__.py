"""
Core functionality for coursierkit.

This package contains the foundational modules that other components depend on.
"""

from .exceptions import (
    CoursierKitError,
    ConfigError,
    ProcessExecutionError,
    InstallationError,
    LaunchError,
    CacheError,
)

from .process import ProcessRunner

from .types import NonEmptyString

__all__ = [
    "CoursierKitError",
    "ConfigError",
    "ProcessExecutionError",
    "InstallationError",
    "LaunchError",
    "CacheError",
    "ProcessRunner",
    "NonEmptyString",
]
