"""
Entry point for running coursierkit as a module.

Usage: python -m coursierkit [command] [options]
"""

from coursierkit.cli.parser import main

if __name__ == "__main__":
    main()
