"""Test fixtures for coursierkit tests.

- tools: Fake executables (a stand-in cs launcher) and helpers to write them

Import fixtures in your tests using:
    from tests.fixtures.tools import tool_dir, fake_coursier_gz
"""

__all__ = [
    "tools",
]
