"""Resolution of external executables.

An external tool is located by probing an ordered list of candidates:
bare command names on the search path, then well-known absolute install
locations, then locations relative to the user's home directory. The
first candidate whose probe invocation exits with status 0 wins.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path, PureWindowsPath

from batchctl.core.errors import ToolNotFoundError
from batchctl.core.paths import get_home_hint
from batchctl.utils.shell import probe_command

logger = logging.getLogger(__name__)

# Probe capability: full argument vector -> exited cleanly?
Prober = Callable[[list[str]], bool]


@dataclass(frozen=True, slots=True)
class ToolSpec:
    """Describes where to look for an external tool and how to probe it.

    Attributes:
        name: Human-readable tool name.
        commands: Bare command names tried on the search path, in order.
        probe_args: No-op arguments used to check that a candidate runs.
        well_known_paths: Absolute install locations, in priority order.
        home_relative_paths: Locations relative to the home directory hint.
        install_hint: Message shown when the tool cannot be found.
    """

    name: str
    commands: tuple[str, ...]
    probe_args: tuple[str, ...]
    well_known_paths: tuple[str, ...] = ()
    home_relative_paths: tuple[str, ...] = ()
    install_hint: str | None = None


@dataclass(frozen=True, slots=True)
class ToolBinding:
    """A resolved external executable, fixed for the duration of a run.

    Attributes:
        name: Human-readable tool name.
        executable: Absolute path or bare command name.
    """

    name: str
    executable: str


SEVEN_ZIP = ToolSpec(
    name="7-Zip",
    commands=("7z", "7zz", "7za"),
    probe_args=("--help",),
    well_known_paths=(
        r"C:\Program Files\7-Zip\7z.exe",
        r"C:\Program Files (x86)\7-Zip\7z.exe",
        r"C:\7-Zip\7z.exe",
        "/usr/bin/7z",
        "/usr/local/bin/7z",
        "/opt/homebrew/bin/7z",
    ),
    home_relative_paths=(
        r"AppData\Local\Programs\7-Zip\7z.exe",
        r"7-Zip\7z.exe",
    ),
    install_hint="Install 7-Zip from https://www.7-zip.org/ or your package manager.",
)

FFMPEG = ToolSpec(
    name="FFmpeg",
    commands=("ffmpeg",),
    probe_args=("-version",),
    well_known_paths=(
        r"C:\Program Files\ffmpeg\bin\ffmpeg.exe",
        r"C:\Program Files (x86)\ffmpeg\bin\ffmpeg.exe",
        r"C:\ffmpeg\bin\ffmpeg.exe",
        "/usr/bin/ffmpeg",
        "/usr/local/bin/ffmpeg",
        "/opt/homebrew/bin/ffmpeg",
    ),
    home_relative_paths=(
        r"ffmpeg\bin\ffmpeg.exe",
        r"AppData\Local\ffmpeg\bin\ffmpeg.exe",
    ),
    install_hint="Install FFmpeg from https://ffmpeg.org/download.html or your package manager.",
)


@dataclass(slots=True)
class ToolLocator:
    """Resolves ToolSpecs to ToolBindings by probing candidates in order.

    The locator has no side effects on the tree being processed; it only
    spawns short-lived help/version invocations.

    Attributes:
        prober: Probe capability; defaults to spawning the candidate.
        home: Home directory hint. None means no home-relative candidates.
        extra_search_roots: Directories searched for each bare command name
            after the well-known paths.
        overrides: Explicit executable per tool name, probed first.
    """

    prober: Prober = probe_command
    home: Path | None = field(default_factory=get_home_hint)
    extra_search_roots: tuple[Path, ...] = ()
    overrides: dict[str, str] = field(default_factory=dict)

    def candidates(self, spec: ToolSpec) -> list[str]:
        """List every candidate for ``spec`` in probe order, without duplicates.

        Args:
            spec: Tool to locate.

        Returns:
            Ordered candidate executables.
        """
        ordered: list[str] = []

        override = self.overrides.get(spec.name)
        if override:
            ordered.append(override)

        ordered.extend(spec.commands)
        ordered.extend(spec.well_known_paths)

        for root in self.extra_search_roots:
            ordered.extend(str(root / command) for command in spec.commands)

        if self.home is not None:
            ordered.extend(_join_home(self.home, rel) for rel in spec.home_relative_paths)

        seen: set[str] = set()
        unique: list[str] = []
        for candidate in ordered:
            if candidate not in seen:
                seen.add(candidate)
                unique.append(candidate)
        return unique

    def resolve(self, spec: ToolSpec) -> ToolBinding:
        """Resolve ``spec`` to the first candidate that probes successfully.

        Args:
            spec: Tool to locate.

        Returns:
            ToolBinding for the first working candidate.

        Raises:
            ToolNotFoundError: If every candidate probe fails.
        """
        candidates = self.candidates(spec)
        logger.debug("Probing %d candidate(s) for %s", len(candidates), spec.name)

        for candidate in candidates:
            logger.debug("Checking: %s", candidate)
            if self.prober([candidate, *spec.probe_args]):
                logger.info("Found %s: %s", spec.name, candidate)
                return ToolBinding(name=spec.name, executable=candidate)

        raise ToolNotFoundError(spec.name, candidates, spec.install_hint)


def _join_home(home: Path, relative: str) -> str:
    """Join a backslash-separated relative path onto the home hint.

    Home-relative candidates are written Windows-style; on POSIX the
    separators are converted so the joined path is native.
    """
    parts = PureWindowsPath(relative).parts
    return str(home.joinpath(*parts))
