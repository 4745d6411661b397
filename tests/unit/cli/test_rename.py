"""Unit tests for the rename command."""

from pathlib import Path

from batchctl.cli.main import app
from batchctl.transforms.naming import HashNamer
from typer.testing import CliRunner

runner = CliRunner()


def _make_source(tmp_path: Path) -> Path:
    source = tmp_path / "src"
    (source / "trip").mkdir(parents=True)
    (source / "a.mp4").write_bytes(b"same bytes")
    (source / "trip" / "copy of a.MP4").write_bytes(b"same bytes")
    (source / "b.webm").write_bytes(b"other bytes")
    (source / "notes.txt").write_text("not a video")
    return source


class TestRenameCommand:
    """Tests for the rename command."""

    def test_copies_by_content(self, tmp_path: Path) -> None:
        """Files are copied under content names and duplicates collapse."""
        source = _make_source(tmp_path)
        target = tmp_path / "target"

        result = runner.invoke(app, ["rename", "--source", str(source), "--target", str(target)])

        assert result.exit_code == 0, result.output
        names = sorted(p.name for p in target.iterdir())
        namer = HashNamer()
        assert names == sorted(
            [
                f"{namer.name_file(source / 'a.mp4')}.mp4",
                f"{namer.name_file(source / 'b.webm')}.webm",
            ]
        )
        assert (source / "a.mp4").exists()
        assert (source / "trip" / "copy of a.MP4").exists()

    def test_move_deletes_copied_sources(self, tmp_path: Path) -> None:
        """--move deletes sources once their copy is verified."""
        source = _make_source(tmp_path)
        target = tmp_path / "target"

        result = runner.invoke(app, ["rename", "-s", str(source), "-t", str(target), "--move"])

        assert result.exit_code == 0, result.output
        assert not (source / "a.mp4").exists()
        assert not (source / "b.webm").exists()
        # Duplicates are skipped, so their sources are kept
        assert (source / "trip" / "copy of a.MP4").exists()
        assert (source / "notes.txt").exists()

    def test_move_from_config(self, tmp_path: Path) -> None:
        """The config can enable move mode."""
        source = _make_source(tmp_path)
        config = tmp_path / "config.toml"
        config.write_text(f'[rename]\nmove = true\ntarget_dir = "{(tmp_path / "t").as_posix()}"\n')

        result = runner.invoke(app, ["-c", str(config), "rename", "-s", str(source)])

        assert result.exit_code == 0, result.output
        assert not (source / "a.mp4").exists()
        assert len(list((tmp_path / "t").iterdir())) == 2

    def test_copy_overrides_config_move(self, tmp_path: Path) -> None:
        """--copy keeps sources even when the config enables move mode."""
        source = _make_source(tmp_path)
        config = tmp_path / "config.toml"
        config.write_text(f'[rename]\nmove = true\ntarget_dir = "{(tmp_path / "t").as_posix()}"\n')

        result = runner.invoke(app, ["-c", str(config), "rename", "-s", str(source), "--copy"])

        assert result.exit_code == 0, result.output
        assert (source / "a.mp4").exists()
        assert (source / "b.webm").exists()
        assert len(list((tmp_path / "t").iterdir())) == 2

    def test_target_inside_source(self, tmp_path: Path) -> None:
        """A target inside the source tree is never walked."""
        source = _make_source(tmp_path)
        target = source / "target"

        first = runner.invoke(app, ["rename", "-s", str(source), "-t", str(target)])
        second = runner.invoke(app, ["rename", "-s", str(source), "-t", str(target)])

        assert first.exit_code == 0, first.output
        assert second.exit_code == 0, second.output
        assert len(list(target.iterdir())) == 2

    def test_ext_option(self, tmp_path: Path) -> None:
        """--ext replaces the configured extension list."""
        source = _make_source(tmp_path)
        target = tmp_path / "target"

        result = runner.invoke(
            app, ["rename", "-s", str(source), "-t", str(target), "-e", "txt"]
        )

        assert result.exit_code == 0, result.output
        assert [p.suffix for p in target.iterdir()] == [".txt"]

    def test_dry_run(self, tmp_path: Path) -> None:
        """Dry runs create nothing, not even the target directory."""
        source = _make_source(tmp_path)
        target = tmp_path / "target"

        result = runner.invoke(app, ["rename", "-s", str(source), "-t", str(target), "--dry-run"])

        assert result.exit_code == 0, result.output
        assert not target.exists()
        assert "would be processed" in result.stdout

    def test_target_is_a_file(self, tmp_path: Path) -> None:
        """A target path that is a file is fatal."""
        source = _make_source(tmp_path)
        target = tmp_path / "target"
        target.write_text("file")

        result = runner.invoke(app, ["rename", "-s", str(source), "-t", str(target)])

        assert result.exit_code == 2
        assert "not a directory" in result.output
