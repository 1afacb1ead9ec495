"""
Coursier management for coursierkit.

Modules:
    installer: Download cs and provision the JVM and managed apps
    launcher: Run applications with cs launch
    remover: Best-effort removal of the cache and installed binaries
"""

from .installer import CoursierInstaller, Installation, install
from .launcher import CoursierLauncher, flatten_args, qualified_name
from .remover import remove

__all__ = [
    "CoursierInstaller",
    "CoursierLauncher",
    "Installation",
    "flatten_args",
    "install",
    "qualified_name",
    "remove",
]
