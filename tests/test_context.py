"""Tests for context module."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from buildfs import context
from buildfs.config import ConfigError, Settings
from buildfs.context import AppContext, create_context, get_default_filesystem_unsafe
from buildfs.filesystem import RealFileSystem
from buildfs.memory import MemoryFileSystem


class TestAppContext:
    """Tests for AppContext dataclass."""

    def test_create_with_all_dependencies(self) -> None:
        """Test creating context with all dependencies."""
        filesystem = MagicMock()
        settings = Settings(search_paths=["/bin"])

        ctx = AppContext(filesystem=filesystem, settings=settings)

        assert ctx.filesystem is filesystem
        assert ctx.settings is settings

    def test_default_filesystem(self) -> None:
        """Test context creates default filesystem if not provided."""
        ctx = AppContext()
        assert isinstance(ctx.filesystem, RealFileSystem)


class TestCreateContext:
    """Tests for create_context factory function."""

    def test_create_context_real(self) -> None:
        """Test the real filesystem is used without a seed."""
        ctx = create_context(settings=Settings(native_copy=False))

        assert isinstance(ctx.filesystem, RealFileSystem)
        assert ctx.filesystem.native_copy is False

    def test_create_context_loads_settings(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test settings are loaded when not provided."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("nativeCopy: false\n")
        monkeypatch.setattr("buildfs.config.CONFIG_FILE", config_file)

        ctx = create_context()

        assert ctx.settings.native_copy is False

    def test_create_context_seeded(self, tmp_path: Path) -> None:
        """Test a seed selects a populated memory filesystem."""
        seed = tmp_path / "seed.yaml"
        seed.write_text("usr:\n  bin:\n    tool: '#!'\n")

        ctx = create_context(settings=Settings(), seed=seed)

        assert isinstance(ctx.filesystem, MemoryFileSystem)
        assert ctx.filesystem.read("/usr/bin/tool") == b"#!"

    def test_create_context_bad_seed(self, tmp_path: Path) -> None:
        """Test an unreadable seed raises ConfigError."""
        with pytest.raises(ConfigError):
            create_context(settings=Settings(), seed=tmp_path / "missing.yaml")


class TestDefaultFilesystem:
    """Tests for the process-wide filesystem accessor."""

    def test_shared_instance(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the same real filesystem is returned every time."""
        monkeypatch.setattr(context, "_default_filesystem", None)

        first = get_default_filesystem_unsafe()

        assert isinstance(first, RealFileSystem)
        assert get_default_filesystem_unsafe() is first
