"""
Launching JVM applications through Coursier.

Refer to https://get-coursier.io/docs/cli-launch for the ``cs launch``
options used here.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Union

from coursierkit.actions import core as actions
from coursierkit.config.settings import DEFAULT_REPOSITORY
from coursierkit.core.exceptions import LaunchError
from coursierkit.core.process import ProcessRunner
from coursierkit.core.types import NonEmptyString

logger = logging.getLogger(__name__)

LaunchArg = Union[str, Sequence[str]]


def qualified_name(app: str, version: Optional[NonEmptyString] = None) -> str:
    """Return ``app`` or ``app:version`` when a version is given."""
    return f"{app}:{version.value}" if version else app


def flatten_args(args: Iterable[LaunchArg]) -> List[str]:
    """
    Inline argument groups, keeping their order.

    Example:
        >>> flatten_args(["a", ["b", "c"], "d"])
        ['a', 'b', 'c', 'd']
    """
    flattened: List[str] = []
    for arg in args:
        if isinstance(arg, str):
            flattened.append(arg)
        else:
            flattened.extend(arg)
    return flattened


class CoursierLauncher:
    """Runs applications with ``cs launch``."""

    def __init__(self, runner: ProcessRunner, repository: str = DEFAULT_REPOSITORY):
        """
        Args:
            runner: Process runner whose search path contains ``cs``
            repository: Extra repository passed with ``-r``
        """
        self.runner = runner
        self.repository = repository

    def launch(
        self,
        app: str,
        version: Optional[NonEmptyString] = None,
        args: Iterable[LaunchArg] = (),
    ) -> None:
        """
        Launch an app using coursier.

        Output of the app is forwarded as it is produced: stdout to info,
        stderr to error.

        Args:
            app: The application's artifact name
            version: The application's version
            args: The args to pass to the application launcher

        Raises:
            LaunchError: If the application exits with a non-zero code
        """
        name = qualified_name(app, version)

        launch_args = [
            "launch",
            "--contrib",
            "-r",
            self.repository,
            name,
            "--",
            *flatten_args(args),
        ]

        with actions.group(f"Launching {name}"):
            returncode = self.runner.run(
                "cs", launch_args, on_stdout=logger.info, on_stderr=logger.error
            )

        if returncode != 0:
            raise LaunchError(name)
