"""
Unit tests for removing Coursier and its cache.
"""

from unittest.mock import Mock

from coursierkit.core.exceptions import ProcessExecutionError
from coursierkit.core.process import ProcessRunner
from coursierkit.coursier.remover import remove
from tests.fixtures.tools import FAKE_COURSIER_SCRIPT, requires_posix, write_tool


def _populate(settings):
    (settings.cache_dir / "https" / "repo1.maven.org").mkdir(parents=True)
    (settings.cache_dir / "https" / "repo1.maven.org" / "a.jar").write_bytes(b"jar")
    settings.bin_dir.mkdir(parents=True)
    for binary in settings.installed_binaries:
        binary.write_text("#!/bin/sh\n")


class TestRemove:
    """Test remove function."""

    def test_removes_cache_and_binaries(self, settings):
        """Test everything install created is deleted."""
        _populate(settings)
        runner = Mock(spec=ProcessRunner)
        runner.run.return_value = 0

        remove(settings, runner)

        assert not settings.cache_dir.exists()
        for binary in settings.installed_binaries:
            assert not binary.exists()
        tool, args = runner.run.call_args.args
        assert (tool, args) == ("cs", ["uninstall", "--all"])

    def test_idempotent_without_installation(self, settings):
        """Test removing twice, or with nothing installed, is fine."""
        runner = Mock(spec=ProcessRunner)
        runner.run.side_effect = ProcessExecutionError("cs", ["uninstall", "--all"])

        remove(settings, runner)
        remove(settings, runner)

        assert not settings.cache_dir.exists()

    def test_uninstall_exit_code_ignored(self, settings):
        """Test a failing uninstall does not stop the cleanup."""
        _populate(settings)
        runner = Mock(spec=ProcessRunner)
        runner.run.return_value = 1

        remove(settings, runner)

        assert not settings.coursier_path.exists()

    def test_default_runner_without_cs(self, settings):
        """Test the default runner tolerates a missing cs."""
        remove(settings)

    @requires_posix
    def test_with_fake_coursier(self, settings):
        """Test removal through a real cs process."""
        _populate(settings)
        write_tool(settings.bin_dir, "cs", FAKE_COURSIER_SCRIPT.split("\n", 1)[1])

        remove(settings)

        assert not settings.bin_dir.joinpath("cs").exists()
        assert not settings.cache_dir.exists()

    @requires_posix
    def test_undecodable_uninstall_output(self, settings):
        """Test output that is not UTF-8 does not interrupt removal."""
        _populate(settings)
        write_tool(
            settings.bin_dir,
            "cs",
            "printf 'Removed caf\\351\\n'\nprintf 'warn \\351\\n' >&2\n",
        )

        remove(settings)

        assert not settings.coursier_path.exists()
        assert not settings.cache_dir.exists()
