"""
coursierkit - Coursier installer and launcher for CI runs.

Installs the Coursier CLI (`cs`), provisions a managed JVM together with
scalafmt and scalafix, launches JVM applications through Coursier and keeps
the Coursier download cache alive between CI runs.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
