"""
CLI module for hash-joiner.

Provides the command-line interface using Click.
"""

from hash_joiner.cli.main import cli, main

__all__ = ["main", "cli"]
