"""
Configuration management for coursierkit.

This package resolves settings from defaults, coursierkit.yaml and
GitHub Actions inputs.
"""

from .settings import (
    CoursierSettings,
    load_config_file,
    load_settings,
    parse_apps,
)

__all__ = [
    "CoursierSettings",
    "load_config_file",
    "load_settings",
    "parse_apps",
]
