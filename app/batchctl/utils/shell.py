"""Shell execution utilities.

Provides safe subprocess execution with proper error handling. Commands
are always spawned from an explicit argument vector, never through a shell.
"""

import subprocess
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a shell command execution.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0


# Capability used by transforms to spawn external tools: args -> result.
CommandRunner = Callable[[list[str]], CommandResult]


def run_command(args: list[str], *, timeout: float | None = None) -> CommandResult:
    """Execute a command and wait for it to finish.

    No timeout is applied by default: archivers and transcoders may run
    for hours on large inputs.

    Args:
        args: Command and arguments to execute.
        timeout: Maximum time in seconds to wait for command.

    Returns:
        CommandResult with stdout, stderr, and returncode.

    Raises:
        subprocess.TimeoutExpired: If command exceeds timeout.
        FileNotFoundError: If command executable is not found.
    """
    result = subprocess.run(
        args,
        capture_output=True,
        text=True,
        errors="replace",
        check=False,
        timeout=timeout,
    )
    return CommandResult(
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
    )


def probe_command(args: list[str], *, timeout: float | None = 15.0) -> bool:
    """Run a short-lived probe invocation and report whether it exited cleanly.

    Output is discarded. Any failure to spawn the process (missing binary,
    permission denied, not executable) or a timeout counts as a failed probe.

    Args:
        args: Probe command and arguments (e.g. ``["7z", "--help"]``).
        timeout: Maximum time in seconds to wait for the probe.

    Returns:
        True if the process exited with status 0.
    """
    try:
        result = subprocess.run(
            args,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            stdin=subprocess.DEVNULL,
            check=False,
            timeout=timeout,
        )
    except (OSError, subprocess.TimeoutExpired):
        return False
    return result.returncode == 0

