"""Shared test fixtures."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pytest

from buildfs.entry import Entry
from buildfs.filesystem import RealFileSystem
from buildfs.memory import MemoryFileSystem
from buildfs.paths import join_path
from buildfs.protocols import FileSystem


@pytest.fixture
def sample_tree() -> list[Entry]:
    """Seed tree with a file and a nested directory under /a."""
    return [
        Entry.directory(
            "a",
            [
                Entry.file("x", b"hello"),
                Entry.directory("b", [Entry.file("y", b"world")]),
            ],
        ),
    ]


@pytest.fixture
def memory_fs(sample_tree: list[Entry]) -> MemoryFileSystem:
    """Create a MemoryFileSystem seeded with the sample tree."""
    return MemoryFileSystem(sample_tree)


@pytest.fixture
def real_fs() -> RealFileSystem:
    """Create a RealFileSystem with the native copy path."""
    return RealFileSystem()


# ============================================================================
# Contract Fixtures
# ============================================================================


@dataclass
class Sandbox:
    """A filesystem plus an existing, empty directory to work in."""

    fs: FileSystem
    root: str

    def path(self, *parts: str) -> str:
        """Build an absolute path below the sandbox root."""
        result = self.root
        for part in parts:
            result = join_path(result, part)
        return result


@pytest.fixture(params=["memory", "real", "real-generic"])
def sandbox(request: pytest.FixtureRequest, tmp_path: Path) -> Sandbox:
    """Run a contract test against every implementation.

    "real-generic" disables the native copy path so the composite
    implementations run against the real disk too.
    """
    if request.param == "memory":
        return Sandbox(fs=MemoryFileSystem([Entry.directory("sandbox")]), root="/sandbox")
    if request.param == "real":
        return Sandbox(fs=RealFileSystem(), root=str(tmp_path))
    return Sandbox(fs=RealFileSystem(native_copy=False), root=str(tmp_path))


@pytest.fixture
def populated(sandbox: Sandbox) -> Sandbox:
    """Sandbox holding a/x, a/b/, and a/b/y."""
    fs = sandbox.fs
    assert fs.create_directory(sandbox.path("a", "b"), True)
    assert fs.write(sandbox.path("a", "x"), b"hello")
    assert fs.write(sandbox.path("a", "b", "y"), b"world")
    return sandbox
