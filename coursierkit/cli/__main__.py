"""
Entry point for running coursierkit CLI as a module.

Usage: python -m coursierkit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
