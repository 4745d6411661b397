"""CLI commands for batchctl.

This package contains all subcommand implementations.
"""

from batchctl.cli.commands import archive, config, rename, transcode

__all__ = ["archive", "config", "rename", "transcode"]
