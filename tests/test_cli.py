"""Tests for CLI commands using context injection.

Commands accept a _context parameter so unit tests can run them against a
MemoryFileSystem without touching the disk. A few end-to-end tests drive the
Typer app through CliRunner.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest
import typer
from typer.testing import CliRunner

from buildfs import __version__, cli
from buildfs.config import Settings
from buildfs.context import AppContext
from buildfs.entry import Entry
from buildfs.memory import MemoryFileSystem
from buildfs.types import EntryType

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_user_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's settings file out of every test."""
    monkeypatch.setattr("buildfs.config.CONFIG_FILE", tmp_path / "no-config.yaml")


@pytest.fixture
def memory_context(memory_fs: MemoryFileSystem) -> AppContext:
    """Create an AppContext around the sample memory tree."""
    return AppContext(filesystem=memory_fs, settings=Settings(search_paths=["/a/b", "/a"]))


class TestQueryCommands:
    """Tests for read-only commands."""

    def test_exists(self, memory_context: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test exists reports an existing path."""
        cli.exists(path="/a/x", _context=memory_context)

        assert "/a/x exists" in capsys.readouterr().out

    def test_exists_missing(self, memory_context: AppContext) -> None:
        """Test exists fails for a missing path."""
        with pytest.raises(typer.Exit) as exc_info:
            cli.exists(path="/a/missing", _context=memory_context)

        assert exc_info.value.exit_code == 1

    def test_info(self, memory_context: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test info shows the entry kind."""
        cli.info(path="/a/b", _context=memory_context)

        out = capsys.readouterr().out
        assert "directory" in out
        assert "Executable" in out

    def test_info_missing(self, memory_context: AppContext) -> None:
        """Test info fails for a missing path."""
        with pytest.raises(typer.Exit):
            cli.info(path="/nope", _context=memory_context)

    def test_ls(self, memory_context: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test ls lists direct children."""
        cli.ls(path="/a", recursive=False, _context=memory_context)

        assert capsys.readouterr().out.split() == ["x", "b"]

    def test_ls_recursive(
        self, memory_context: AppContext, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test ls -r lists descendants."""
        cli.ls(path="/a", recursive=True, _context=memory_context)

        assert capsys.readouterr().out.split() == ["x", "b", "b/y"]

    def test_ls_empty(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test ls reports an empty directory."""
        ctx = AppContext(filesystem=MemoryFileSystem([Entry.directory("d")]))

        cli.ls(path="/d", recursive=False, _context=ctx)

        assert "/d is empty" in capsys.readouterr().out

    def test_ls_not_a_directory(self, memory_context: AppContext) -> None:
        """Test ls fails on a file."""
        with pytest.raises(typer.Exit):
            cli.ls(path="/a/x", recursive=False, _context=memory_context)

    def test_readlink_unsupported(self, memory_context: AppContext) -> None:
        """Test readlink fails where links are not modeled."""
        with pytest.raises(typer.Exit):
            cli.readlink(path="/a/x", _context=memory_context)

    def test_realpath(self, memory_context: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test realpath prints the normalized path."""
        cli.realpath(path="/a/b/../x", _context=memory_context)

        assert capsys.readouterr().out.strip() == "/a/x"

    def test_find_uses_settings(
        self, memory_context: AppContext, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test find falls back to the configured search paths."""
        cli.find(name="x", paths=None, _context=memory_context)

        assert capsys.readouterr().out.strip() == "/a/x"

    def test_find_explicit_paths(
        self, memory_context: AppContext, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test --path overrides the configured search paths."""
        cli.find(name="y", paths=["/a", "/a/b"], _context=memory_context)

        assert capsys.readouterr().out.strip() == "/a/b/y"

    def test_which_skips_directories(
        self, memory_context: AppContext, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test which ignores directories."""
        memory_context.filesystem.create_directory("/a/b/x", False)

        cli.which(name="x", paths=None, _context=memory_context)

        assert capsys.readouterr().out.strip() == "/a/x"

    def test_which_missing(self, memory_context: AppContext) -> None:
        """Test which fails when nothing matches."""
        with pytest.raises(typer.Exit):
            cli.which(name="cc", paths=None, _context=memory_context)


class TestContextDoubles:
    """Tests using a mocked filesystem."""

    def test_cat_passes_range(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test cat forwards the byte range to the filesystem."""
        # Arrange
        filesystem = MagicMock()
        filesystem.read.return_value = b"abc"
        ctx = AppContext(filesystem=filesystem, settings=Settings())

        # Act
        cli.cat(path="/f", offset=4, length=3, _context=ctx)

        # Assert
        filesystem.read.assert_called_once_with("/f", 4, 3)
        assert capsys.readouterr().out == "abc"

    def test_cp_dispatches_links(self) -> None:
        """Test cp copies a symbolic link as a link."""
        # Arrange
        filesystem = MagicMock()
        filesystem.entry_type.return_value = EntryType.SYMBOLIC_LINK
        ctx = AppContext(filesystem=filesystem, settings=Settings())

        # Act
        cli.cp(source="/l", destination="/m", recursive=False, _context=ctx)

        # Assert
        filesystem.copy_symbolic_link.assert_called_once_with("/l", "/m")
        filesystem.copy_file.assert_not_called()


class TestMutationCommands:
    """Tests for commands that change the tree."""

    def test_write(self, memory_context: AppContext) -> None:
        """Test write stores UTF-8 text."""
        cli.write(path="/a/new", text="héllo", _context=memory_context)

        assert memory_context.filesystem.read("/a/new") == "héllo".encode()

    def test_write_beneath_file(self, memory_context: AppContext) -> None:
        """Test write fails beneath a file."""
        with pytest.raises(typer.Exit):
            cli.write(path="/a/x/new", text="data", _context=memory_context)

    def test_touch(self, memory_context: AppContext) -> None:
        """Test touch creates an empty file and keeps existing ones."""
        cli.touch(path="/a/new", _context=memory_context)
        cli.touch(path="/a/x", _context=memory_context)

        assert memory_context.filesystem.read("/a/new") == b""
        assert memory_context.filesystem.read("/a/x") == b"hello"

    def test_mkdir(self, memory_context: AppContext) -> None:
        """Test mkdir requires --parents for missing ancestors."""
        with pytest.raises(typer.Exit):
            cli.mkdir(path="/p/q", parents=False, _context=memory_context)

        cli.mkdir(path="/p/q", parents=True, _context=memory_context)

        assert memory_context.filesystem.is_directory("/p/q")

    def test_ln_unsupported(self, memory_context: AppContext) -> None:
        """Test ln fails where links are not modeled."""
        with pytest.raises(typer.Exit):
            cli.ln(target="x", path="/a/link", _context=memory_context)

    def test_rm_file(self, memory_context: AppContext) -> None:
        """Test rm removes a file."""
        cli.rm(path="/a/x", recursive=False, _context=memory_context)

        assert not memory_context.filesystem.exists("/a/x")

    def test_rm_directory_needs_recursive(self, memory_context: AppContext) -> None:
        """Test rm refuses a non-empty directory without -r."""
        with pytest.raises(typer.Exit):
            cli.rm(path="/a", recursive=False, _context=memory_context)

        cli.rm(path="/a", recursive=True, _context=memory_context)

        assert not memory_context.filesystem.exists("/a")

    def test_rm_missing(self, memory_context: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test rm reports a missing path."""
        with pytest.raises(typer.Exit):
            cli.rm(path="/missing", recursive=False, _context=memory_context)

        assert "does not exist" in capsys.readouterr().out

    def test_cp_file(self, memory_context: AppContext) -> None:
        """Test cp copies a file."""
        cli.cp(source="/a/x", destination="/copy", recursive=False, _context=memory_context)

        assert memory_context.filesystem.read("/copy") == b"hello"

    def test_cp_directory(self, memory_context: AppContext) -> None:
        """Test cp -r copies a tree."""
        cli.cp(source="/a", destination="/copy", recursive=True, _context=memory_context)

        assert memory_context.filesystem.read("/copy/b/y") == b"world"

    def test_cp_missing(self, memory_context: AppContext) -> None:
        """Test cp fails for a missing source."""
        with pytest.raises(typer.Exit):
            cli.cp(source="/missing", destination="/copy", recursive=False, _context=memory_context)


class TestApp:
    """End-to-end tests through the Typer app."""

    def test_version(self) -> None:
        """Test --version prints the version."""
        result = runner.invoke(cli.app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_cat_range(self, tmp_path: Path) -> None:
        """Test cat prints a byte range of a real file."""
        path = tmp_path / "file"
        path.write_bytes(b"0123456789")

        result = runner.invoke(cli.app, ["cat", str(path), "--offset", "2", "--length", "3"])

        assert result.exit_code == 0
        assert result.output == "234"

    def test_cat_out_of_range(self, tmp_path: Path) -> None:
        """Test cat fails for a range past the end."""
        path = tmp_path / "file"
        path.write_bytes(b"short")

        result = runner.invoke(cli.app, ["cat", str(path), "-o", "6"])

        assert result.exit_code == 1

    def test_real_round_trip(self, tmp_path: Path) -> None:
        """Test creating, linking and listing on disk."""
        base = str(tmp_path)

        assert runner.invoke(cli.app, ["mkdir", "-p", f"{base}/d/e"]).exit_code == 0
        assert runner.invoke(cli.app, ["write", f"{base}/d/f", "data"]).exit_code == 0
        assert runner.invoke(cli.app, ["ln", "f", f"{base}/d/link"]).exit_code == 0

        result = runner.invoke(cli.app, ["readlink", f"{base}/d/link"])
        assert result.output.strip() == "f"

        result = runner.invoke(cli.app, ["ls", "-r", f"{base}/d"])
        assert sorted(result.output.split()) == ["e", "f", "link"]

    def test_seeded_tree(self, tmp_path: Path) -> None:
        """Test --seed runs commands against an in-memory tree."""
        seed = tmp_path / "seed.yaml"
        seed.write_text("src:\n  main.c: 'int main;'\n")

        result = runner.invoke(cli.app, ["--seed", str(seed), "cat", "/src/main.c"])

        assert result.exit_code == 0
        assert result.output == "int main;"

    def test_bad_seed(self, tmp_path: Path) -> None:
        """Test an unreadable seed exits with an error."""
        result = runner.invoke(cli.app, ["--seed", str(tmp_path / "missing.yaml"), "ls", "/"])

        assert result.exit_code == 1
        assert "Cannot load seed" in result.output

    def test_bad_config(self, tmp_path: Path) -> None:
        """Test an invalid settings file exits with an error."""
        config = tmp_path / "config.yaml"
        config.write_text("logLevel: chatty\n")

        result = runner.invoke(cli.app, ["--config", str(config), "exists", "/"])

        assert result.exit_code == 1
        assert "Invalid settings" in result.output
