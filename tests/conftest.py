"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules. External
tools are never spawned: transforms receive fake command runners that
emulate an archiver or transcoder by writing the expected output file.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from batchctl.tools.locator import ToolBinding
from batchctl.utils.shell import CommandResult


@pytest.fixture(autouse=True)
def isolated_config(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory so user config never leaks in."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def seven_zip() -> ToolBinding:
    """A resolved archiver binding."""
    return ToolBinding(name="7-Zip", executable="7z")


@pytest.fixture
def ffmpeg() -> ToolBinding:
    """A resolved transcoder binding."""
    return ToolBinding(name="FFmpeg", executable="ffmpeg")


class FakeRunner:
    """Records invocations and emulates an external tool.

    Args:
        output_index: Position of the output path in the argument vector.
        payload: Bytes written to the output path on success. ``None``
            writes nothing (tool claims success without output).
        returncode: Exit status reported for every call.
        stderr: Standard error reported for every call.
        fail_on: Source names for which the call fails with exit status 2.
    """

    def __init__(
        self,
        *,
        output_index: int,
        payload: bytes | None = b"artifact",
        returncode: int = 0,
        stderr: str = "",
        fail_on: tuple[str, ...] = (),
    ) -> None:
        self.calls: list[list[str]] = []
        self._output_index = output_index
        self._payload = payload
        self._returncode = returncode
        self._stderr = stderr
        self._fail_on = fail_on

    def __call__(self, args: list[str]) -> CommandResult:
        self.calls.append(list(args))
        if any(Path(arg).name in self._fail_on for arg in args):
            return CommandResult(stdout="", stderr="boom: cannot process input", returncode=2)
        if self._returncode == 0 and self._payload is not None:
            Path(args[self._output_index]).write_bytes(self._payload)
        return CommandResult(stdout="", stderr=self._stderr, returncode=self._returncode)


@pytest.fixture
def make_archiver() -> Callable[..., FakeRunner]:
    """Factory for fake archivers (``7z a <target> <source>``)."""

    def factory(**kwargs: object) -> FakeRunner:
        return FakeRunner(output_index=-2, **kwargs)  # type: ignore[arg-type]

    return factory


@pytest.fixture
def make_transcoder() -> Callable[..., FakeRunner]:
    """Factory for fake transcoders (``ffmpeg -i <source> ... -y <target>``)."""

    def factory(**kwargs: object) -> FakeRunner:
        return FakeRunner(output_index=-1, **kwargs)  # type: ignore[arg-type]

    return factory
