"""
Pytest configuration and shared fixtures for coursierkit tests.
"""

import pytest
from pathlib import Path

# Import test fixtures to make them available to all tests
# ruff: noqa: F401
from tests.fixtures.tools import tool_dir, fake_coursier_gz

from coursierkit.config.settings import CoursierSettings


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clean_actions_env(monkeypatch):
    """Run every test outside of GitHub Actions, with no action inputs set."""
    import os

    for name in list(os.environ):
        if name.startswith("INPUT_") or name in ("GITHUB_ACTIONS", "GITHUB_PATH"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch) -> Path:
    """Create isolated home directory for tests."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()

    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setenv("USERPROFILE", str(fake_home))

    return fake_home


@pytest.fixture
def settings(tmp_path: Path) -> CoursierSettings:
    """Settings pointing every directory into the test's temporary directory."""
    return CoursierSettings(
        cli_url="https://example.com/cs-x86_64-pc-linux.gz",
        bin_dir=tmp_path / "bin",
        cache_dir=tmp_path / ".cache" / "coursier" / "v1",
        cache_store_dir=tmp_path / "store",
    )


@pytest.fixture
def github_actions(tmp_path: Path, monkeypatch) -> Path:
    """Pretend to run inside GitHub Actions; returns the GITHUB_PATH file."""
    path_file = tmp_path / "github_path"
    path_file.touch()
    monkeypatch.setenv("GITHUB_ACTIONS", "true")
    monkeypatch.setenv("GITHUB_PATH", str(path_file))
    return path_file
