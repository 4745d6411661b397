"""Unit tests for the tree walker."""

import os
from pathlib import Path

import pytest
from batchctl.core.errors import DirectoryReadError
from batchctl.filesystem.exclusion import ExclusionPolicy
from batchctl.filesystem.models import EntryKind
from batchctl.filesystem.walker import TreeWalker

_real_scandir = os.scandir


def _deny(monkeypatch: pytest.MonkeyPatch, denied: Path) -> None:
    """Make os.scandir fail for one directory."""

    def fake_scandir(path: object) -> object:
        if Path(str(path)) == denied:
            raise PermissionError(13, "Permission denied", str(path))
        return _real_scandir(path)  # type: ignore[arg-type]

    monkeypatch.setattr("batchctl.filesystem.walker.os.scandir", fake_scandir)


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """Create a small tree.

    root/
      a.mov
      b/
        c.avi
        d/
          e.mts
      .hidden.mov
    """
    root = tmp_path / "root"
    (root / "b" / "d").mkdir(parents=True)
    (root / "a.mov").write_bytes(b"a")
    (root / "b" / "c.avi").write_bytes(b"c")
    (root / "b" / "d" / "e.mts").write_bytes(b"e")
    (root / ".hidden.mov").write_bytes(b"h")
    return root.resolve()


def _names(walker: TreeWalker, root: Path, policy: ExclusionPolicy | None = None) -> list[str]:
    return [
        str(e.path.relative_to(root)) for e in walker.walk(root, policy or ExclusionPolicy.build())
    ]


class TestTreeWalker:
    """Tests for TreeWalker."""

    def test_preorder_depth_first(self, tree: Path) -> None:
        """Directories are yielded before their subtree, siblings sorted."""
        assert _names(TreeWalker(), tree) == [
            "a.mov",
            "b",
            os.path.join("b", "c.avi"),
            os.path.join("b", "d"),
            os.path.join("b", "d", "e.mts"),
        ]

    def test_max_depth_one(self, tree: Path) -> None:
        """max_depth=1 yields only the root's immediate children."""
        assert _names(TreeWalker(max_depth=1), tree) == ["a.mov", "b"]

    def test_max_depth_two(self, tree: Path) -> None:
        """Entries deeper than max_depth are not yielded."""
        assert _names(TreeWalker(max_depth=2), tree) == [
            "a.mov",
            "b",
            os.path.join("b", "c.avi"),
            os.path.join("b", "d"),
        ]

    def test_invalid_max_depth(self) -> None:
        """max_depth must be positive."""
        with pytest.raises(ValueError, match="max_depth"):
            TreeWalker(max_depth=0)

    def test_hidden_included_when_allowed(self, tree: Path) -> None:
        """Hidden entries are yielded when the policy allows them."""
        names = _names(TreeWalker(max_depth=1), tree, ExclusionPolicy.build(skip_hidden=False))

        assert ".hidden.mov" in names

    def test_excluded_directory_not_descended(self, tree: Path) -> None:
        """Excluded directories hide their whole subtree."""
        policy = ExclusionPolicy.build(patterns=["b"])

        assert _names(TreeWalker(), tree, policy) == ["a.mov"]

    def test_whitelist_keeps_directories_traversable(self, tree: Path) -> None:
        """A file whitelist still walks into subdirectories."""
        policy = ExclusionPolicy.build(whitelist=["mts"])
        entries = list(TreeWalker().walk(tree, policy))

        files = [e.name for e in entries if e.kind == EntryKind.FILE]
        assert files == ["e.mts"]

    def test_yields_absolute_paths(self, tree: Path) -> None:
        """Every entry carries an absolute path."""
        assert all(e.path.is_absolute() for e in TreeWalker().walk(tree, ExclusionPolicy.build()))

    def test_empty_root(self, tmp_path: Path) -> None:
        """An empty root yields nothing."""
        assert list(TreeWalker().walk(tmp_path, ExclusionPolicy.build())) == []

    def test_missing_root_is_fatal(self, tmp_path: Path) -> None:
        """A root that is not a directory raises DirectoryReadError."""
        with pytest.raises(DirectoryReadError, match="not a directory"):
            list(TreeWalker().walk(tmp_path / "missing", ExclusionPolicy.build()))

    def test_unreadable_root_is_fatal(self, tree: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """The root is fatal even with skip_unreadable."""
        _deny(monkeypatch, tree)

        with pytest.raises(DirectoryReadError) as exc_info:
            list(TreeWalker(skip_unreadable=True).walk(tree, ExclusionPolicy.build()))
        assert exc_info.value.path == tree

    def test_unreadable_subdirectory_is_fatal_by_default(
        self, tree: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """An unreadable subdirectory aborts the walk by default."""
        _deny(monkeypatch, tree / "b")

        with pytest.raises(DirectoryReadError) as exc_info:
            list(TreeWalker().walk(tree, ExclusionPolicy.build()))
        assert exc_info.value.path == tree / "b"
        assert "Permission denied" in str(exc_info.value)

    def test_unreadable_subdirectory_skipped(
        self, tree: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """skip_unreadable drops the unreadable branch and continues."""
        _deny(monkeypatch, tree / "b" / "d")

        names = _names(TreeWalker(skip_unreadable=True), tree)

        assert names == ["a.mov", "b", os.path.join("b", "c.avi"), os.path.join("b", "d")]

    def test_symlinks_reported_not_followed(self, tree: Path) -> None:
        """A symlink cycle cannot make the walk infinite."""
        try:
            (tree / "b" / "loop").symlink_to(tree, target_is_directory=True)
        except OSError:
            pytest.skip("symlinks not supported")

        entries = list(TreeWalker().walk(tree, ExclusionPolicy.build()))

        loop = [e for e in entries if e.name == "loop"]
        assert len(loop) == 1
        assert loop[0].kind == EntryKind.SYMLINK
        assert len(entries) == 6

    def test_walk_is_restartable(self, tree: Path) -> None:
        """Each call to walk starts from scratch."""
        walker = TreeWalker()

        assert _names(walker, tree) == _names(walker, tree)
