"""Base filesystem implementation with shared composite operations.

Pattern: Template Method - the base class implements copying and lookups
purely in terms of primitive operations, which subclasses provide. A
subclass may override a composite (for example with a native bulk copy) as
long as the result is indistinguishable apart from speed and atomicity.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

from buildfs.paths import SEPARATOR, join_path
from buildfs.protocols import DirectoryVisitor
from buildfs.types import EntryType

logger = logging.getLogger(__name__)


class BaseFileSystem(ABC):
    """Base class for filesystem implementations.

    Satisfies the FileSystem protocol once the abstract primitives are
    implemented.
    """

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check if a path exists."""
        ...

    @abstractmethod
    def is_readable(self, path: str) -> bool:
        """Check if a path is readable."""
        ...

    @abstractmethod
    def is_writable(self, path: str) -> bool:
        """Check if a path is writable."""
        ...

    @abstractmethod
    def is_executable(self, path: str) -> bool:
        """Check if a path is executable."""
        ...

    @abstractmethod
    def entry_type(self, path: str) -> EntryType | None:
        """Get the kind of entry at a path."""
        ...

    @abstractmethod
    def create_file(self, path: str) -> bool:
        """Create an empty file unless one exists."""
        ...

    @abstractmethod
    def read(self, path: str, offset: int = 0, length: int | None = None) -> bytes | None:
        """Read bytes from a file."""
        ...

    @abstractmethod
    def write(self, path: str, contents: bytes) -> bool:
        """Create or replace a file."""
        ...

    @abstractmethod
    def remove_file(self, path: str) -> bool:
        """Remove a file."""
        ...

    @abstractmethod
    def read_symbolic_link(self, path: str) -> str | None:
        """Read the target of a symbolic link."""
        ...

    @abstractmethod
    def write_symbolic_link(self, target: str, path: str) -> bool:
        """Create a symbolic link."""
        ...

    @abstractmethod
    def remove_symbolic_link(self, path: str) -> bool:
        """Remove a symbolic link."""
        ...

    @abstractmethod
    def create_directory(self, path: str, recursive: bool) -> bool:
        """Create a directory."""
        ...

    @abstractmethod
    def read_directory(self, path: str, recursive: bool, visit: DirectoryVisitor) -> bool:
        """Enumerate the contents of a directory."""
        ...

    @abstractmethod
    def remove_directory(self, path: str, recursive: bool) -> bool:
        """Remove a directory."""
        ...

    @abstractmethod
    def resolve_path(self, path: str) -> str:
        """Resolve and normalize a path."""
        ...

    # ------------------------------------------------------------------
    # Kind checks
    # ------------------------------------------------------------------

    def is_file(self, path: str) -> bool:
        return self.entry_type(path) is EntryType.FILE

    def is_symbolic_link(self, path: str) -> bool:
        return self.entry_type(path) is EntryType.SYMBOLIC_LINK

    def is_directory(self, path: str) -> bool:
        return self.entry_type(path) is EntryType.DIRECTORY

    # ------------------------------------------------------------------
    # Composites
    # ------------------------------------------------------------------

    def copy_file(self, source: str, destination: str) -> bool:
        """Copy a file by reading the source and writing the destination.

        Args:
            source: File to copy.
            destination: Path of the copy; an existing file is replaced.

        Returns:
            True if copied, False otherwise.
        """
        if self.entry_type(source) is not EntryType.FILE:
            logger.debug("Cannot copy %s: not a file", source)
            return False

        contents = self.read(source)
        if contents is None:
            return False

        return self.write(destination, contents)

    def copy_symbolic_link(self, source: str, destination: str) -> bool:
        """Copy a symbolic link by re-creating its target at the destination.

        Args:
            source: Link to copy.
            destination: Path of the copy; an existing link is replaced.

        Returns:
            True if copied, False otherwise.
        """
        target = self.read_symbolic_link(source)
        if target is None:
            logger.debug("Cannot copy %s: not a symbolic link", source)
            return False

        if self.entry_type(destination) is EntryType.SYMBOLIC_LINK:
            if not self.remove_symbolic_link(destination):
                return False

        return self.write_symbolic_link(target, destination)

    def copy_directory(self, source: str, destination: str, recursive: bool) -> bool:
        """Copy a directory entry by entry.

        An existing destination directory is removed first. A destination
        that is the source or one of its ancestors, or that exists as
        anything other than a directory, fails without changes. Files are
        copied with `copy_file` and symbolic links are preserved as links
        with `copy_symbolic_link`; they are never followed. Without
        ``recursive``, subdirectories are re-created empty.

        Args:
            source: Directory to copy.
            destination: Path of the copy.
            recursive: Copy subdirectory contents too.

        Returns:
            True if everything was copied, False on the first failure.
        """
        if self.entry_type(source) is not EntryType.DIRECTORY:
            logger.debug("Cannot copy %s: not a directory", source)
            return False

        if self._contains(destination, source):
            logger.debug("Cannot copy %s into itself or its ancestor %s", source, destination)
            return False

        names = self.list_directory(source)
        if names is None:
            return False

        kind = self.entry_type(destination)
        if kind is EntryType.DIRECTORY:
            if not self.remove_directory(destination, True):
                return False
        elif kind is not None:
            logger.debug("Cannot copy %s: %s exists as %s", source, destination, kind.value)
            return False

        if not self.create_directory(destination, False):
            return False

        for name in names:
            child_source = join_path(source, name)
            child_destination = join_path(destination, name)
            if not self._copy_child(child_source, child_destination, recursive):
                logger.debug("Copy of %s to %s failed", child_source, child_destination)
                return False

        return True

    def _copy_child(self, source: str, destination: str, recursive: bool) -> bool:
        """Copy one directory child according to its kind."""
        kind = self.entry_type(source)
        if kind is EntryType.FILE:
            return self.copy_file(source, destination)
        if kind is EntryType.SYMBOLIC_LINK:
            return self.copy_symbolic_link(source, destination)
        if kind is EntryType.DIRECTORY:
            if recursive:
                return self.copy_directory(source, destination, True)
            return self.create_directory(destination, False)
        return False

    def _contains(self, directory: str, path: str) -> bool:
        """Check if ``path`` resolves to ``directory`` or somewhere below it."""
        resolved_directory = self.resolve_path(directory)
        resolved_path = self.resolve_path(path)
        if not resolved_directory or not resolved_path:
            return False
        if resolved_path == resolved_directory:
            return True
        return resolved_path.startswith(resolved_directory.rstrip(SEPARATOR) + SEPARATOR)

    def list_directory(self, path: str, recursive: bool = False) -> list[str] | None:
        """Collect the relative paths `read_directory` reports.

        Args:
            path: Directory to enumerate.
            recursive: Descend into subdirectories.

        Returns:
            Relative paths in visit order, or None if enumeration failed.
        """
        names: list[str] = []
        if not self.read_directory(path, recursive, names.append):
            return None
        return names

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def find_file(self, name: str, search_paths: Sequence[str]) -> str | None:
        """Find the first directory in ``search_paths`` containing ``name``."""
        for directory in search_paths:
            candidate = join_path(directory, name)
            if self.exists(candidate):
                return candidate
        return None

    def find_executable(self, name: str, search_paths: Sequence[str]) -> str | None:
        """Find the first executable file named ``name`` in ``search_paths``.

        Symbolic links are followed, so a link to an executable file matches
        and a link to a directory does not.
        """
        for directory in search_paths:
            candidate = join_path(directory, name)
            if not self.is_executable(candidate):
                continue
            # Links count by what they point at.
            resolved = self.resolve_path(candidate)
            if resolved and self.is_file(resolved):
                return candidate
        return None
