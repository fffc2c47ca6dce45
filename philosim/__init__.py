"""Dining philosophers simulation: argument parsing, the threaded table and the command line."""

__version__ = "0.1.0"
__all__ = ["args", "table", "cli"]