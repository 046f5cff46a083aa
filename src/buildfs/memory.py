"""In-memory filesystem implementation.

Backs the filesystem contract with an `Entry` tree rooted at ``/``. Every
operation is one `walk_path` call whose callback decides what happens at
the final (or every) path component. Symbolic links are not modeled.

The tree is mutated in place; an instance must not be shared between
threads without external locking.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from buildfs.base import BaseFileSystem
from buildfs.entry import ROOT_NAME, Entry
from buildfs.paths import get_directory_name, join_path, normalize_path
from buildfs.protocols import DirectoryVisitor
from buildfs.types import EntryType
from buildfs.walker import WalkResult, walk_path

logger = logging.getLogger(__name__)


class MemoryFileSystem(BaseFileSystem):
    """Filesystem simulated entirely in memory.

    Useful for deterministic tests of code that takes a FileSystem. Seed it
    with literal entries:

        fs = MemoryFileSystem([
            Entry.directory("a", [Entry.file("x", b"1")]),
        ])
    """

    def __init__(self, entries: Iterable[Entry] = ()) -> None:
        """Initialize the filesystem with a seed tree.

        Args:
            entries: Top-level entries placed under ``/``; each is deep-copied.

        Raises:
            ValueError: If entries repeat a name or contain symbolic links.
        """
        self._root = Entry.directory(ROOT_NAME, entries)
        links = [link.name for link in self._root.iter_symbolic_links()]
        if links:
            raise ValueError(f"Symbolic links are not supported in memory: {links}")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> MemoryFileSystem:
        """Create a filesystem from a nested mapping.

        Args:
            mapping: See `buildfs.fixtures.entries_from_mapping`.

        Returns:
            Seeded MemoryFileSystem.
        """
        from buildfs.fixtures import entries_from_mapping

        return cls(entries_from_mapping(mapping))

    @classmethod
    def from_files(cls, files: Mapping[str, str | bytes]) -> MemoryFileSystem:
        """Create a filesystem from absolute file paths and their contents.

        Parent directories are created as needed.

        Args:
            files: Absolute paths mapped to text or bytes contents.

        Returns:
            Seeded MemoryFileSystem.

        Raises:
            ValueError: If a path cannot be created.
        """
        fs = cls()
        for path, contents in files.items():
            data = contents.encode("utf-8") if isinstance(contents, str) else contents
            if not fs.create_directory(get_directory_name(path), True) or not fs.write(path, data):
                raise ValueError(f"Cannot seed file: {path}")
        return fs

    @property
    def root(self) -> Entry:
        """Root directory entry."""
        return self._root

    # ------------------------------------------------------------------
    # Existence and permissions
    # ------------------------------------------------------------------

    def exists(self, path: str) -> bool:
        return bool(walk_path(self._root, path, False, lambda parent, name, entry: entry))

    def is_readable(self, path: str) -> bool:
        return self.exists(path)

    def is_writable(self, path: str) -> bool:
        return self.exists(path)

    def is_executable(self, path: str) -> bool:
        return self.exists(path)

    def entry_type(self, path: str) -> EntryType | None:
        result = walk_path(self._root, path, False, lambda parent, name, entry: entry)
        if result.entry is None:
            return None
        return result.entry.type

    def is_file(self, path: str) -> bool:
        def _check(parent: Entry, name: str, entry: Entry | None) -> Entry | None:
            if entry is not None and not entry.is_file:
                return None
            return entry

        return bool(walk_path(self._root, path, False, _check))

    def is_directory(self, path: str) -> bool:
        def _check(parent: Entry, name: str, entry: Entry | None) -> Entry | None:
            if entry is not None and not entry.is_directory:
                return None
            return entry

        return bool(walk_path(self._root, path, False, _check))

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def create_file(self, path: str) -> bool:
        def _create(parent: Entry, name: str, entry: Entry | None) -> Entry | None:
            if entry is not None:
                # Existing files are left untouched.
                return entry if entry.is_file else None
            if not name:
                return None
            return parent.add_child(Entry.file(name))

        return self._report(walk_path(self._root, path, False, _create), "create file", path)

    def read(self, path: str, offset: int = 0, length: int | None = None) -> bytes | None:
        result: list[bytes] = []

        def _read(parent: Entry, name: str, entry: Entry | None) -> Entry | None:
            if entry is None or not entry.is_file:
                return None

            size = len(entry.contents)
            end = size if length is None else offset + length
            if offset < 0 or offset > size or end < offset or end > size:
                logger.debug(
                    "Read of %s out of range: offset=%d length=%s size=%d",
                    path, offset, length, size,
                )
                return None

            result.append(entry.contents[offset:end])
            return entry

        if not walk_path(self._root, path, False, _read):
            return None
        return result[0]

    def write(self, path: str, contents: bytes) -> bool:
        data = bytes(contents)

        def _write(parent: Entry, name: str, entry: Entry | None) -> Entry | None:
            if entry is not None:
                if not entry.is_file:
                    return None
                entry.contents = data
                return entry
            if not name:
                return None
            return parent.add_child(Entry.file(name, data))

        return self._report(walk_path(self._root, path, False, _write), "write", path)

    def remove_file(self, path: str) -> bool:
        def _remove(parent: Entry, name: str, entry: Entry | None) -> Entry | None:
            if entry is None or not entry.is_file:
                return None
            parent.remove_child(name)
            return parent

        return self._report(walk_path(self._root, path, False, _remove), "remove file", path)

    # ------------------------------------------------------------------
    # Symbolic links (not modeled)
    # ------------------------------------------------------------------

    def is_symbolic_link(self, path: str) -> bool:
        return False

    def read_symbolic_link(self, path: str) -> str | None:
        return None

    def write_symbolic_link(self, target: str, path: str) -> bool:
        logger.debug("Symbolic links are not supported in memory: %s", path)
        return False

    def copy_symbolic_link(self, source: str, destination: str) -> bool:
        return False

    def remove_symbolic_link(self, path: str) -> bool:
        return False

    # ------------------------------------------------------------------
    # Directories
    # ------------------------------------------------------------------

    def create_directory(self, path: str, recursive: bool) -> bool:
        def _create(parent: Entry, name: str, entry: Entry | None) -> Entry | None:
            if entry is not None:
                return entry if entry.is_directory else None
            if not name:
                return None
            return parent.add_child(Entry.directory(name))

        result = walk_path(self._root, path, recursive, _create)
        return self._report(result, "create directory", path)

    def read_directory(self, path: str, recursive: bool, visit: DirectoryVisitor) -> bool:
        def _process(subpath: str | None, directory: Entry) -> None:
            # Snapshot so a visitor mutating the tree cannot disturb iteration.
            children = list(directory.children)
            for child in children:
                visit(join_path(subpath, child.name) if subpath else child.name)

            if recursive:
                for child in children:
                    if child.is_directory:
                        _process(join_path(subpath, child.name) if subpath else child.name, child)

        def _read(parent: Entry, name: str, entry: Entry | None) -> Entry | None:
            if entry is None or not entry.is_directory:
                return None
            _process(None, entry)
            return entry

        return bool(walk_path(self._root, path, False, _read))

    def remove_directory(self, path: str, recursive: bool) -> bool:
        def _remove(parent: Entry, name: str, entry: Entry | None) -> Entry | None:
            if entry is None or not entry.is_directory or not name:
                return None
            if entry.children and not recursive:
                return None
            if not self._remove_children(entry):
                return None
            parent.remove_child(name)
            return parent

        return self._report(walk_path(self._root, path, False, _remove), "remove directory", path)

    def _remove_children(self, directory: Entry) -> bool:
        """Remove every child of a directory, depth first."""
        for child in list(directory.children):
            if child.is_directory and not self._remove_children(child):
                return False
            if not directory.remove_child(child.name):
                return False
        return True

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def resolve_path(self, path: str) -> str:
        if self.exists(path):
            return normalize_path(path)
        return ""

    @staticmethod
    def _report(result: WalkResult, operation: str, path: str) -> bool:
        """Log a failed walk and convert the result to a bool."""
        if not result:
            logger.debug("Cannot %s %s: %s", operation, path, result.status.value)
        return bool(result)
