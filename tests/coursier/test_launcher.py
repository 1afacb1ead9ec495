"""
Unit tests for launching applications through Coursier.
"""

import logging
from unittest.mock import Mock

import pytest

from coursierkit.core.exceptions import LaunchError
from coursierkit.core.process import ProcessRunner
from coursierkit.core.types import NonEmptyString
from coursierkit.coursier.launcher import CoursierLauncher, flatten_args, qualified_name
from tests.fixtures.tools import FAKE_COURSIER_SCRIPT, requires_posix, write_tool


class TestQualifiedName:
    """Test qualified_name function."""

    def test_without_version(self):
        assert qualified_name("scalafmt") == "scalafmt"

    def test_with_version(self):
        assert qualified_name("scalafmt", NonEmptyString("3.7.17")) == "scalafmt:3.7.17"

    def test_explicit_none(self):
        assert qualified_name("ch.epfl.scala:scalafix-cli_2.13.12", None) == (
            "ch.epfl.scala:scalafix-cli_2.13.12"
        )


class TestFlattenArgs:
    """Test flatten_args function."""

    def test_groups_are_inlined_in_order(self):
        assert flatten_args(["a", ["b", "c"], "d"]) == ["a", "b", "c", "d"]

    def test_empty(self):
        assert flatten_args([]) == []

    def test_empty_group(self):
        assert flatten_args([[], "x", ()]) == ["x"]

    def test_tuples(self):
        assert flatten_args([("--config", ".scalafmt.conf"), "--check"]) == [
            "--config",
            ".scalafmt.conf",
            "--check",
        ]


class TestLaunch:
    """Test CoursierLauncher.launch."""

    def _runner(self, returncode=0):
        runner = Mock(spec=ProcessRunner)
        runner.run.return_value = returncode
        return runner

    def test_launch_arguments(self):
        """Test the full cs launch command line."""
        runner = self._runner()

        CoursierLauncher(runner).launch(
            "scalafmt", NonEmptyString("3.7.17"), ["--list", ["--mode", "diff"]]
        )

        tool, args = runner.run.call_args.args
        assert tool == "cs"
        assert args == [
            "launch",
            "--contrib",
            "-r",
            "sonatype:snapshots",
            "scalafmt:3.7.17",
            "--",
            "--list",
            "--mode",
            "diff",
        ]

    def test_launch_custom_repository(self):
        runner = self._runner()

        CoursierLauncher(runner, repository="ivy2Local").launch("scalafix")

        _, args = runner.run.call_args.args
        assert args[:6] == ["launch", "--contrib", "-r", "ivy2Local", "scalafix", "--"]

    def test_launch_failure_names_application(self):
        """Test the error keeps the qualified name."""
        runner = self._runner(returncode=1)

        with pytest.raises(LaunchError) as exc_info:
            CoursierLauncher(runner).launch("scalafmt", NonEmptyString("3.7.17"))

        assert str(exc_info.value) == "Launching scalafmt:3.7.17 failed"
        assert exc_info.value.qualified_name == "scalafmt:3.7.17"

    def test_launch_failure_without_version(self):
        runner = self._runner(returncode=2)

        with pytest.raises(LaunchError, match="Launching scalafix failed"):
            CoursierLauncher(runner).launch("scalafix")

    def test_output_routed_to_log_levels(self):
        """Test stdout goes to info and stderr to error."""
        runner = self._runner()

        CoursierLauncher(runner).launch("scalafmt")

        kwargs = runner.run.call_args.kwargs
        assert kwargs["on_stdout"] == logging.getLogger(
            "coursierkit.coursier.launcher"
        ).info
        assert kwargs["on_stderr"] == logging.getLogger(
            "coursierkit.coursier.launcher"
        ).error

    @requires_posix
    def test_launch_with_fake_coursier(self, tool_dir, caplog):
        """Test output of a real process is logged line by line."""
        write_tool(tool_dir, "cs", FAKE_COURSIER_SCRIPT.split("\n", 1)[1])
        runner = ProcessRunner([tool_dir])

        with caplog.at_level(logging.INFO, logger="coursierkit.coursier.launcher"):
            CoursierLauncher(runner).launch("scalafmt", None, ["--check"])

        messages = [(r.levelno, r.getMessage()) for r in caplog.records]
        assert (
            logging.INFO,
            "launch --contrib -r sonatype:snapshots scalafmt -- --check",
        ) in messages
        assert (logging.ERROR, "resolving") in messages

    @requires_posix
    def test_launch_with_latin1_output(self, tool_dir, caplog):
        """Test a successful app printing non-UTF-8 bytes is not reported as failed."""
        write_tool(tool_dir, "cs", "printf 'Formatted caf\\351.scala\\n'\nexit 0\n")
        runner = ProcessRunner([tool_dir])

        with caplog.at_level(logging.INFO, logger="coursierkit.coursier.launcher"):
            CoursierLauncher(runner).launch("scalafmt", None, ["--check"])

        assert "Formatted caf\ufffd.scala" in [r.getMessage() for r in caplog.records]
