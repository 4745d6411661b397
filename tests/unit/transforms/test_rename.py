"""Unit tests for the content-addressed rename transform."""

from pathlib import Path
from unittest.mock import patch

from batchctl.filesystem.models import EntryKind, FileSystemEntry
from batchctl.models.outcome import FailureKind, OutcomeStatus, SkipReason
from batchctl.transforms.naming import HashNamer
from batchctl.transforms.rename import HashRenameTransform


def _file(path: Path, content: bytes) -> FileSystemEntry:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return FileSystemEntry.from_path(path, EntryKind.FILE)


class TestHashRenameTransform:
    """Tests for HashRenameTransform."""

    def test_copies_under_fingerprint(self, tmp_path: Path) -> None:
        """The copy is named by content and keeps the extension."""
        entry = _file(tmp_path / "src" / "Clip.MP4", b"video bytes")
        target_dir = tmp_path / "target"
        transform = HashRenameTransform(target_dir)

        outcome = transform.apply(entry)

        expected = target_dir / f"{HashNamer().name_file(entry.path)}.mp4"
        assert outcome.status == OutcomeStatus.SUCCEEDED
        assert outcome.artifact_path == expected
        assert expected.read_bytes() == b"video bytes"
        assert entry.path.exists()

    def test_creates_target_dir(self, tmp_path: Path) -> None:
        """Missing target directories are created."""
        entry = _file(tmp_path / "a.mp4", b"a")
        target_dir = tmp_path / "deep" / "target"

        HashRenameTransform(target_dir).apply(entry)

        assert target_dir.is_dir()

    def test_duplicate_content_skipped(self, tmp_path: Path) -> None:
        """A second file with identical bytes maps to the same target."""
        first = _file(tmp_path / "src" / "a.mp4", b"same")
        second = _file(tmp_path / "src" / "sub" / "b.mp4", b"same")
        transform = HashRenameTransform(tmp_path / "target")

        assert transform.apply(first).is_success
        outcome = transform.apply(second)

        assert outcome.skip_reason == SkipReason.ALREADY_EXISTS
        assert outcome.artifact_path == transform.target_for(first)
        assert len(list((tmp_path / "target").iterdir())) == 1

    def test_no_partial_files_left(self, tmp_path: Path) -> None:
        """Temporary copies are renamed into place."""
        entry = _file(tmp_path / "a.mp4", b"a" * 10_000)
        transform = HashRenameTransform(tmp_path / "target")

        transform.apply(entry)

        assert [p.name for p in (tmp_path / "target").iterdir()] == [
            transform.target_for(entry).name
        ]

    def test_copy_failure_cleans_up(self, tmp_path: Path) -> None:
        """A failed copy leaves neither a target nor a temporary file."""
        entry = _file(tmp_path / "a.mp4", b"a")
        transform = HashRenameTransform(tmp_path / "target")

        copy_error = OSError("disk full")
        with patch("batchctl.transforms.rename.shutil.copyfileobj", side_effect=copy_error):
            outcome = transform.apply(entry)

        assert outcome.failure == FailureKind.IO_ERROR
        assert outcome.message == "disk full"
        assert list((tmp_path / "target").iterdir()) == []

    def test_unreadable_source(self, tmp_path: Path) -> None:
        """A source that cannot be fingerprinted is an I/O failure."""
        entry = FileSystemEntry.from_path(tmp_path / "gone.mp4", EntryKind.FILE)

        outcome = HashRenameTransform(tmp_path / "target").apply(entry)

        assert outcome.failure == FailureKind.IO_ERROR

    def test_fingerprint_cached_per_path(self, tmp_path: Path) -> None:
        """The source is hashed once even when planned and applied."""
        entry = _file(tmp_path / "a.mp4", b"a")
        namer = HashNamer()
        transform = HashRenameTransform(tmp_path / "target", namer=namer)

        with patch.object(namer, "name_file", wraps=namer.name_file) as spy:
            transform.plan(entry)
            transform.apply(entry)

        assert spy.call_count == 1

    def test_verify_size_match(self, tmp_path: Path) -> None:
        """Verification compares source and artifact sizes."""
        entry = _file(tmp_path / "a.mp4", b"abc")
        artifact = tmp_path / "copy.mp4"
        artifact.write_bytes(b"ab")
        transform = HashRenameTransform(tmp_path / "target")

        problem = transform.verify(entry, artifact)

        assert problem is not None
        assert "Size mismatch" in problem

    def test_verify_accepts_empty_copy_of_empty_source(self, tmp_path: Path) -> None:
        """An empty source legitimately yields an empty copy."""
        entry = _file(tmp_path / "empty.mp4", b"")
        transform = HashRenameTransform(tmp_path / "target")

        outcome = transform.apply(entry)

        assert outcome.is_success
        assert outcome.artifact_path is not None
        assert transform.verify(entry, outcome.artifact_path) is None
