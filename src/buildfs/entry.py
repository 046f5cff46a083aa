"""Entry tree backing the in-memory filesystem.

Each directory exclusively owns its children. Seed trees passed in by
callers are deep-copied before they are attached anywhere, so no node is
ever reachable from two parents.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable
from dataclasses import dataclass, field

from buildfs.paths import SEPARATOR
from buildfs.types import EntryType

__all__ = ["Entry", "ROOT_NAME"]

ROOT_NAME = SEPARATOR


@dataclass(eq=False)
class Entry:
    """A file, symbolic link, or directory in the in-memory tree.

    Attributes:
        name: Single path component (the root is named ``/``).
        type: Kind of entry; decides which payload field is meaningful.
        contents: File bytes (files only).
        target: Link target relative to the containing directory (links only).
        children: Owned child entries with unique names (directories only).

    Note:
        Prefer the factory methods `file()`, `directory()` and
        `symbolic_link()` for construction.
    """

    name: str
    type: EntryType
    contents: bytes = b""
    target: str = ""
    children: list[Entry] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.name:
            raise ValueError("Entry name cannot be empty")
        if SEPARATOR in self.name and self.name != ROOT_NAME:
            raise ValueError(f"Entry name cannot contain '{SEPARATOR}': {self.name!r}")
        if self.type is not EntryType.DIRECTORY and self.children:
            raise ValueError(f"Only directories have children: {self.name!r}")

        seen: set[str] = set()
        for child in self.children:
            if child.name in seen:
                raise ValueError(f"Duplicate entry '{child.name}' in '{self.name}'")
            seen.add(child.name)

    @classmethod
    def file(cls, name: str, contents: bytes = b"") -> Entry:
        """Create a file entry.

        Args:
            name: File name.
            contents: Initial file contents.

        Returns:
            New file Entry.
        """
        return cls(name=name, type=EntryType.FILE, contents=bytes(contents))

    @classmethod
    def directory(cls, name: str, children: Iterable[Entry] = ()) -> Entry:
        """Create a directory entry owning copies of the given children.

        Args:
            name: Directory name.
            children: Child entries; each is deep-copied.

        Returns:
            New directory Entry.

        Raises:
            ValueError: If two children share a name.
        """
        return cls(
            name=name,
            type=EntryType.DIRECTORY,
            children=[copy.deepcopy(child) for child in children],
        )

    @classmethod
    def symbolic_link(cls, name: str, target: str) -> Entry:
        """Create a symbolic link entry."""
        return cls(name=name, type=EntryType.SYMBOLIC_LINK, target=target)

    @property
    def is_file(self) -> bool:
        return self.type is EntryType.FILE

    @property
    def is_directory(self) -> bool:
        return self.type is EntryType.DIRECTORY

    def child(self, name: str) -> Entry | None:
        """Find a direct child by name.

        Args:
            name: Child name.

        Returns:
            The child Entry, or None if this directory has no such child.

        Raises:
            ValueError: If this entry is not a directory.
        """
        self._require_directory()
        for entry in self.children:
            if entry.name == name:
                return entry
        return None

    def add_child(self, entry: Entry) -> Entry:
        """Attach a new child and return it.

        Raises:
            ValueError: If a child with the same name already exists or this
                entry is not a directory.
        """
        self._require_directory()
        if self.child(entry.name) is not None:
            raise ValueError(f"Duplicate entry '{entry.name}' in '{self.name}'")
        self.children.append(entry)
        return entry

    def remove_child(self, name: str) -> bool:
        """Detach a child by name.

        Returns:
            True if removed, False if not found.

        Raises:
            ValueError: If this entry is not a directory.
        """
        self._require_directory()
        for index, entry in enumerate(self.children):
            if entry.name == name:
                del self.children[index]
                return True
        return False

    def _require_directory(self) -> None:
        if not self.is_directory:
            raise ValueError(f"'{self.name}' is not a directory")

    def iter_symbolic_links(self) -> Iterable[Entry]:
        """Yield every symbolic link in this subtree."""
        if self.type is EntryType.SYMBOLIC_LINK:
            yield self
        for entry in self.children:
            yield from entry.iter_symbolic_links()
