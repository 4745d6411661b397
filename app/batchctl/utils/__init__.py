"""Utility modules for batchctl.

This module exports commonly used utility functions.
"""

from batchctl.utils.formatting import (
    configure_logging,
    console,
    err_console,
    print_error,
    print_info,
    print_success,
)
from batchctl.utils.shell import CommandResult, CommandRunner, probe_command, run_command

__all__ = [
    "CommandResult",
    "CommandRunner",
    "configure_logging",
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "probe_command",
    "run_command",
]
