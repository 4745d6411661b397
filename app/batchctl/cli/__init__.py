"""CLI package for batchctl.

This package contains the Typer application and all subcommands.
"""

from batchctl.cli.main import app

__all__ = ["app"]
