"""Protocol definitions for the filesystem capability contract.

Collaborators (project-file parsing, build-phase execution, drivers) type
their dependencies against `FileSystem` rather than a concrete class, so
either the real or the in-memory implementation can be injected.

All concrete implementations satisfy this protocol structurally. Paths are
absolute ``/``-separated strings; turning relative paths into absolute ones
is the caller's responsibility.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol, runtime_checkable

from buildfs.types import EntryType

__all__ = ["DirectoryVisitor", "FileSystem"]

DirectoryVisitor = Callable[[str], None]


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for filesystem operations.

    Every operation reports failure through its return value (False, None,
    or an empty string) instead of raising. Recursive operations do not
    roll back partial changes when they fail.
    """

    def exists(self, path: str) -> bool:
        """Check if a path exists.

        Args:
            path: Path to check.

        Returns:
            True if path exists, False otherwise.
        """
        ...

    def is_readable(self, path: str) -> bool:
        """Check if a path exists and is readable."""
        ...

    def is_writable(self, path: str) -> bool:
        """Check if a path exists and is writable."""
        ...

    def is_executable(self, path: str) -> bool:
        """Check if a path exists and is executable."""
        ...

    def entry_type(self, path: str) -> EntryType | None:
        """Get the kind of entry at a path without following a final link.

        Args:
            path: Path to inspect.

        Returns:
            EntryType, or None if absent or of an unsupported kind.
        """
        ...

    def is_file(self, path: str) -> bool:
        """Check if a path is a regular file."""
        ...

    def create_file(self, path: str) -> bool:
        """Create an empty file.

        Args:
            path: Path of the file.

        Returns:
            True if created or already a file, False if the path exists as
            something else or cannot be created.
        """
        ...

    def read(self, path: str, offset: int = 0, length: int | None = None) -> bytes | None:
        """Read bytes from a file.

        Args:
            path: Path to the file.
            offset: Byte offset to start reading at.
            length: Number of bytes to read, or None to read to the end.

        Returns:
            The requested bytes, or None if the path is not a file or the
            range extends past the end of the file.
        """
        ...

    def write(self, path: str, contents: bytes) -> bool:
        """Create or replace a file.

        Args:
            path: Path to the file.
            contents: Bytes to store.

        Returns:
            True if written, False otherwise.
        """
        ...

    def copy_file(self, source: str, destination: str) -> bool:
        """Copy a file to a new path, replacing a file already there."""
        ...

    def remove_file(self, path: str) -> bool:
        """Remove a file.

        Returns:
            True if removed, False if absent or not a file.
        """
        ...

    def is_symbolic_link(self, path: str) -> bool:
        """Check if a path is a symbolic link."""
        ...

    def read_symbolic_link(self, path: str) -> str | None:
        """Read the target of a symbolic link.

        Args:
            path: Path to the link.

        Returns:
            Target relative to the link's containing directory, or None.
        """
        ...

    def write_symbolic_link(self, target: str, path: str) -> bool:
        """Create a symbolic link pointing at a target.

        Args:
            target: Target relative to the link's containing directory.
            path: Path of the new link.

        Returns:
            True if created, False otherwise.
        """
        ...

    def copy_symbolic_link(self, source: str, destination: str) -> bool:
        """Copy a symbolic link, replacing a link already at the destination."""
        ...

    def remove_symbolic_link(self, path: str) -> bool:
        """Remove a symbolic link.

        Returns:
            True if removed, False if absent or not a symbolic link.
        """
        ...

    def is_directory(self, path: str) -> bool:
        """Check if a path is a directory."""
        ...

    def create_directory(self, path: str, recursive: bool) -> bool:
        """Create a directory.

        Args:
            path: Path of the directory.
            recursive: Create missing intermediate directories too.

        Returns:
            True if created or already a directory, False otherwise.
        """
        ...

    def read_directory(self, path: str, recursive: bool, visit: DirectoryVisitor) -> bool:
        """Enumerate the contents of a directory.

        Every child of a directory is reported before any of its
        subdirectories is descended into.

        Args:
            path: Directory to enumerate.
            recursive: Descend into subdirectories.
            visit: Called once per entry with its path relative to ``path``.

        Returns:
            True if enumerated, False if ``path`` is not a readable directory.
        """
        ...

    def list_directory(self, path: str, recursive: bool = False) -> list[str] | None:
        """Collect the relative paths `read_directory` reports."""
        ...

    def copy_directory(self, source: str, destination: str, recursive: bool) -> bool:
        """Copy a directory, replacing a directory already at the destination.

        Args:
            source: Directory to copy.
            destination: Path of the copy.
            recursive: Copy subdirectory contents too.

        Returns:
            True if copied, False otherwise. Copying onto the source
            itself or one of its ancestors fails without changes.
        """
        ...

    def remove_directory(self, path: str, recursive: bool) -> bool:
        """Remove a directory.

        Args:
            path: Directory to remove.
            recursive: Remove contents first; otherwise it must be empty.

        Returns:
            True if removed, False otherwise.
        """
        ...

    def resolve_path(self, path: str) -> str:
        """Resolve symbolic links and normalize a path.

        Returns:
            Resolved path, or an empty string if it cannot be resolved.
        """
        ...

    def find_file(self, name: str, search_paths: Sequence[str]) -> str | None:
        """Find the first directory in ``search_paths`` containing ``name``.

        Args:
            name: File name to look for.
            search_paths: Directories to scan, in order.

        Returns:
            Full path of the first match, or None.
        """
        ...

    def find_executable(self, name: str, search_paths: Sequence[str]) -> str | None:
        """Find the first executable file named ``name`` in ``search_paths``."""
        ...
