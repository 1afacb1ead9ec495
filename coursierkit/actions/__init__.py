"""
GitHub Actions integration for coursierkit.

Modules:
    core: Action inputs, workflow-command logging, log groups and PATH export
"""

from .core import (
    ActionsFormatter,
    add_path,
    configure_logging,
    get_input,
    group,
    is_github_actions,
)

__all__ = [
    "ActionsFormatter",
    "add_path",
    "configure_logging",
    "get_input",
    "group",
    "is_github_actions",
]
