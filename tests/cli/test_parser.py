"""
Unit tests for the coursierkit CLI.
"""

from unittest.mock import patch

import pytest

from coursierkit.cli.parser import CLI
from coursierkit.core.exceptions import InstallationError, LaunchError
from coursierkit.core.types import NonEmptyString


@pytest.fixture(autouse=True)
def restore_root_logger():
    import logging

    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def home(isolated_home, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return isolated_home


class TestParser:
    """Test argument parsing."""

    def test_launch_arguments(self):
        args = CLI().parser.parse_args(
            ["launch", "scalafmt", "--app-version", "3.7.17", "--", "--check", "-v"]
        )

        assert args.command == "launch"
        assert args.app == "scalafmt"
        assert args.app_version == "3.7.17"
        assert args.app_args == ["--check", "-v"]

    def test_cache_hash(self):
        args = CLI().parser.parse_args(["restore-cache", "abc"])
        assert args.hash == "abc"

    def test_no_command_prints_help(self, capsys):
        assert CLI().run([]) == 1
        assert "usage: coursierkit" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            CLI().run(["--version"])

        assert exc_info.value.code == 0
        assert "coursierkit" in capsys.readouterr().out


class TestCommands:
    """Test command dispatch and exit codes."""

    def test_install_failure_exit_code(self, home, caplog):
        with patch(
            "coursierkit.cli.commands.install.CoursierInstaller.install",
            side_effect=InstallationError(),
        ):
            assert CLI().run(["install"]) == 1

    def test_install_success(self, home):
        with patch(
            "coursierkit.cli.commands.install.CoursierInstaller.install"
        ) as mock_install:
            assert CLI().run(["install"]) == 0

        mock_install.assert_called_once()

    def test_launch_passes_version_and_args(self, home):
        with patch(
            "coursierkit.cli.commands.launch.CoursierLauncher.launch"
        ) as mock_launch:
            code = CLI().run(["launch", "scalafmt", "--app-version", "3.7.17", "--", "--check"])

        assert code == 0
        mock_launch.assert_called_once_with(
            "scalafmt", NonEmptyString("3.7.17"), ["--check"]
        )

    def test_launch_blank_version_is_latest(self, home):
        with patch(
            "coursierkit.cli.commands.launch.CoursierLauncher.launch"
        ) as mock_launch:
            CLI().run(["launch", "scalafix", "--app-version", " "])

        mock_launch.assert_called_once_with("scalafix", None, [])

    def test_launch_failure_exit_code(self, home):
        with patch(
            "coursierkit.cli.commands.launch.CoursierLauncher.launch",
            side_effect=LaunchError("scalafmt"),
        ):
            assert CLI().run(["launch", "scalafmt"]) == 1

    def test_cache_commands_never_fail(self, home):
        """Test cache commands exit 0 even with nothing to save."""
        assert CLI().run(["restore-cache", "abc"]) == 0
        assert CLI().run(["save-cache", "abc"]) == 0

    def test_remove_without_installation(self, home):
        assert CLI().run(["remove"]) == 0

    def test_invalid_config_exit_code(self, home, tmp_path):
        config = tmp_path / "broken.yaml"
        config.write_text("coursier: [unclosed\n")

        assert CLI().run(["--config", str(config), "install"]) == 1

    @pytest.mark.parametrize(
        "command, warning",
        [
            (["restore-cache", "abc"], "Unable to restore Coursier's cache"),
            (["save-cache", "abc"], "Unable to save Coursier's cache"),
            (["remove"], "Unable to remove coursier"),
        ],
    )
    def test_broken_config_file_only_warns(self, home, tmp_path, caplog, command, warning):
        """Test fail-soft commands exit 0 with a malformed coursierkit.yaml."""
        (tmp_path / "coursierkit.yaml").write_text("coursier: [unclosed\n")

        # Keep caplog's handler on the root logger
        with patch("coursierkit.cli.parser.configure_logging"):
            assert CLI().run(command) == 0

        assert warning in [r.getMessage() for r in caplog.records]
