"""
coursierkit CLI commands.

Each module exposes the handler(s) the parser dispatches to.
"""
