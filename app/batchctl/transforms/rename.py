"""Content-addressed copy/rename transform."""

import logging
import os
import shutil
from pathlib import Path
from tempfile import NamedTemporaryFile

from batchctl.filesystem.models import FileSystemEntry
from batchctl.models.outcome import FailureKind, OperationOutcome
from batchctl.transforms.base import Transform
from batchctl.transforms.naming import HashNamer

logger = logging.getLogger(__name__)


class HashRenameTransform(Transform):
    """Copies a file into ``target_dir`` under its content fingerprint.

    ``clip.MP4`` becomes ``<base58 blake3>.mp4``. Byte-identical sources map
    to the same target, so every copy after the first is skipped.

    Args:
        target_dir: Directory receiving the renamed copies.
        namer: Fingerprint function; defaults to :class:`HashNamer`.
    """

    def __init__(self, target_dir: Path, *, namer: HashNamer | None = None) -> None:
        super().__init__()
        self._target_dir = Path(target_dir)
        self._namer = namer or HashNamer()
        # Fingerprints are computed once per source path per run
        self._targets: dict[Path, Path] = {}

    @property
    def name(self) -> str:
        return "rename"

    @property
    def target_dir(self) -> Path:
        return self._target_dir

    def target_for(self, entry: FileSystemEntry) -> Path:
        target = self._targets.get(entry.path)
        if target is None:
            target = self._target_dir / self._namer.filename_for(entry.path)
            self._targets[entry.path] = target
        return target

    def apply(self, entry: FileSystemEntry) -> OperationOutcome:
        try:
            return super().apply(entry)
        except OSError as e:
            logger.warning("Cannot fingerprint %s: %s", entry.path, e)
            return OperationOutcome.failed(FailureKind.IO_ERROR, str(e))

    def _run(self, entry: FileSystemEntry, target: Path) -> OperationOutcome:
        tmp_path: Path | None = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                mode="wb",
                dir=target.parent,
                prefix=".batchctl-",
                suffix=".part",
                delete=False,
            ) as f:
                tmp_path = Path(f.name)
                with open(entry.path, "rb") as src:
                    shutil.copyfileobj(src, f)
            shutil.copystat(entry.path, tmp_path)
            # os.replace() is atomic on POSIX
            os.replace(tmp_path, target)
        except OSError as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            logger.warning("Copy failed for %s: %s", entry.path, e)
            return OperationOutcome.failed(FailureKind.IO_ERROR, str(e))

        logger.info("Copied: %s -> %s", entry.path, target)
        return OperationOutcome.succeeded(target)

    def verify(self, entry: FileSystemEntry, artifact: Path) -> str | None:
        """Require the copy to match the source size exactly.

        Unlike the default check, an empty source legitimately produces an
        empty artifact. Such a copy is byte-identical to its source, so in
        move mode an empty original is deleted like any other.
        """
        try:
            source_size = entry.path.stat().st_size
            artifact_size = artifact.stat().st_size
        except OSError as e:
            return f"Cannot stat artifact {artifact}: {e}"
        if source_size != artifact_size:
            return f"Size mismatch: {artifact_size} bytes copied, expected {source_size}"
        return None
