"""Application context for dependency injection.

Components that touch the filesystem receive a `FileSystem` at
construction instead of reaching for a global. This module is the one
place where the concrete implementation is chosen.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from buildfs.config import Settings, load_settings
from buildfs.protocols import FileSystem

_default_filesystem: FileSystem | None = None


def _default_filesystem_factory() -> FileSystem:
    """Create the default filesystem implementation."""
    from buildfs.filesystem import RealFileSystem
    return RealFileSystem()


@dataclass
class AppContext:
    """Container for application dependencies.

    The filesystem is typed with the FileSystem protocol, so tests can
    inject a MemoryFileSystem or any other test double.
    """

    filesystem: FileSystem = field(default_factory=_default_filesystem_factory)
    settings: Settings = field(default_factory=Settings)


def create_context(
    settings: Settings | None = None,
    seed: Path | None = None,
) -> AppContext:
    """Factory for application dependencies.

    Args:
        settings: Loaded settings. Defaults to `load_settings()`.
        seed: YAML fixture; when given, a MemoryFileSystem seeded from it is
            used instead of the real filesystem.

    Returns:
        Configured AppContext.

    Raises:
        ConfigError: If settings or the seed fixture cannot be loaded.
    """
    from buildfs.filesystem import RealFileSystem
    from buildfs.fixtures import load_seed
    from buildfs.memory import MemoryFileSystem

    settings = settings or load_settings()
    filesystem: FileSystem
    if seed is not None:
        filesystem = MemoryFileSystem(load_seed(seed))
    else:
        filesystem = RealFileSystem.create(settings)

    return AppContext(filesystem=filesystem, settings=settings)


def get_default_filesystem_unsafe() -> FileSystem:
    """Access a process-wide real filesystem.

    Transitional convenience for top-level wiring only. New code should take
    a FileSystem argument (or an AppContext) instead of calling this.

    Returns:
        The shared RealFileSystem instance.
    """
    global _default_filesystem
    if _default_filesystem is None:
        _default_filesystem = _default_filesystem_factory()
    return _default_filesystem
