"""
Coursier installation.

Downloads the ``cs`` launcher, provisions a managed JVM and the configured
applications (scalafmt and scalafix by default) into the same directory and
confirms each installation by asking the tools for their versions.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from coursierkit.actions import core as actions
from coursierkit.config.settings import CoursierSettings
from coursierkit.core.download import download_file
from coursierkit.core.exceptions import (
    ConfigError,
    InstallationError,
    ProcessExecutionError,
)
from coursierkit.core.filesystem import (
    decompress_gzip,
    ensure_directory,
    make_executable,
)
from coursierkit.core.process import ProcessRunner

logger = logging.getLogger(__name__)


@dataclass
class Installation:
    """Result of a successful installation."""

    bin_dir: Path
    coursier_path: Path
    coursier_version: str
    app_versions: Dict[str, str] = field(default_factory=dict)


def clean_version(output: str, app: Optional[str] = None) -> str:
    """
    Extract the version from a ``--version`` output.

    Example:
        >>> clean_version("scalafmt 3.7.17\\n", "scalafmt")
        '3.7.17'
    """
    output = output.strip()
    if app and output.startswith(f"{app} "):
        output = output[len(app) + 1:]
    return output.strip()


class CoursierInstaller:
    """
    Installs Coursier and the applications it manages.

    Attributes:
        settings: Resolved coursierkit settings
        runner: Process runner that receives the binary directory
    """

    def __init__(
        self, settings: CoursierSettings, runner: Optional[ProcessRunner] = None
    ):
        self.settings = settings
        self.runner = runner or ProcessRunner()

    def install(self) -> Installation:
        """
        Install ``cs`` and add its directory to the runner's search path.

        Once coursier is installed, installs the JVM and the configured apps.

        Returns:
            Installation details with the reported versions

        Raises:
            InstallationError: If any step fails; the cause is only logged at
                debug level
        """
        try:
            return self._install()
        except Exception as e:
            logger.debug(str(e))
            raise InstallationError() from e

    def _install(self) -> Installation:
        settings = self.settings

        if not settings.cli_url:
            raise ConfigError("Input required and not supplied: coursier-cli-url")

        logger.debug(f"Installing coursier from {settings.cli_url}")

        bin_dir = ensure_directory(settings.bin_dir)

        archive = download_file(
            settings.cli_url,
            bin_dir / "cs.gz",
            expected_sha256=settings.cli_sha256,
        )
        coursier_path = make_executable(decompress_gzip(archive))

        self.runner.add_to_search_path(bin_dir)
        actions.add_path(bin_dir)

        setup_args = [
            "setup",
            "--yes",
            "--jvm",
            settings.jvm,
            "--apps",
            ",".join(settings.apps),
            "--install-dir",
            str(bin_dir),
        ]
        returncode = self.runner.run(
            "cs", setup_args, on_stdout=logger.debug, on_stderr=logger.debug
        )
        if returncode != 0:
            raise ProcessExecutionError("cs", setup_args, returncode)

        coursier_version = clean_version(self.runner.execute("cs", "version"))
        logger.info(f"✓ Coursier installed, version: {coursier_version}")

        app_versions = {}
        for app in settings.apps:
            version = clean_version(self.runner.execute(app, "--version"), app)
            app_versions[app] = version
            logger.info(f"✓ {app.capitalize()} installed, version: {version}")

        return Installation(
            bin_dir=bin_dir,
            coursier_path=coursier_path,
            coursier_version=coursier_version,
            app_versions=app_versions,
        )


def install(
    settings: CoursierSettings, runner: Optional[ProcessRunner] = None
) -> Installation:
    """Install coursier and its managed tools. See :meth:`CoursierInstaller.install`."""
    return CoursierInstaller(settings, runner).install()
