"""Real filesystem implementation.

This module maps the filesystem contract onto ``os`` calls. Copies use
``shutil`` (which picks the platform's fast copy primitive where one
exists) unless the native fast path is disabled, in which case the
composite implementations from `BaseFileSystem` are used.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
from typing import TYPE_CHECKING

from buildfs.base import BaseFileSystem
from buildfs.paths import get_directory_name, join_path
from buildfs.protocols import DirectoryVisitor
from buildfs.types import EntryType

if TYPE_CHECKING:
    from buildfs.config import Settings

logger = logging.getLogger(__name__)


def _creation_mode() -> int:
    """Get the most permissive directory mode the current umask allows."""
    mask = os.umask(0)
    os.umask(mask)
    return 0o777 & ~mask


def _same_entry(first: str, second: str) -> bool:
    """Check if two paths name the same directory entry, without following links."""
    try:
        return os.path.samestat(os.lstat(first), os.lstat(second))
    except OSError:
        return False


class RealFileSystem(BaseFileSystem):
    """Production filesystem implementation.

    Holds no state apart from the copy strategy; every entry is an OS-managed
    object referenced by path.
    """

    def __init__(self, native_copy: bool = True) -> None:
        """Initialize the real filesystem.

        Args:
            native_copy: Use ``shutil`` bulk copies instead of the generic
                read/write composites.

        Note:
            Prefer using factory methods `create()` or `create_default()` for construction.
        """
        self.native_copy = native_copy

    @classmethod
    def create(cls, settings: Settings) -> RealFileSystem:
        """Create a real filesystem configured from settings.

        Args:
            settings: Loaded settings.

        Returns:
            Configured RealFileSystem.
        """
        return cls(native_copy=settings.native_copy)

    @classmethod
    def create_default(cls) -> RealFileSystem:
        """Create a real filesystem with the native copy fast path enabled."""
        return cls()

    # ------------------------------------------------------------------
    # Existence and permissions
    # ------------------------------------------------------------------

    def exists(self, path: str) -> bool:
        return os.access(path, os.F_OK)

    def is_readable(self, path: str) -> bool:
        return os.access(path, os.R_OK)

    def is_writable(self, path: str) -> bool:
        return os.access(path, os.W_OK)

    def is_executable(self, path: str) -> bool:
        return os.access(path, os.X_OK)

    def entry_type(self, path: str) -> EntryType | None:
        """Get the kind of entry at a path without following a final link.

        Devices, sockets and pipes are reported as None.
        """
        try:
            mode = os.lstat(path).st_mode
        except OSError:
            return None

        if stat.S_ISREG(mode):
            return EntryType.FILE
        if stat.S_ISLNK(mode):
            return EntryType.SYMBOLIC_LINK
        if stat.S_ISDIR(mode):
            return EntryType.DIRECTORY
        return None

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def create_file(self, path: str) -> bool:
        kind = self.entry_type(path)
        if kind is EntryType.FILE:
            return True
        if kind is not None:
            logger.debug("Cannot create file %s: exists as %s", path, kind.value)
            return False

        try:
            with open(path, "xb"):
                pass
        except FileExistsError:
            return self.is_file(path)
        except OSError as e:
            logger.debug("Cannot create file %s: %s", path, e)
            return False
        return True

    def read(self, path: str, offset: int = 0, length: int | None = None) -> bytes | None:
        """Read bytes from a file.

        Args:
            path: Path to the file.
            offset: Byte offset to start reading at.
            length: Number of bytes to read, or None to read to the end.

        Returns:
            The requested bytes, or None if the file cannot be read or the
            range extends past its end.
        """
        if offset < 0 or (length is not None and length < 0):
            return None

        try:
            with open(path, "rb") as f:
                size = os.fstat(f.fileno()).st_size
                end = size if length is None else offset + length
                if offset > size or end > size:
                    logger.debug(
                        "Read of %s out of range: offset=%d length=%s size=%d",
                        path, offset, length, size,
                    )
                    return None

                f.seek(offset)
                data = f.read(end - offset)
        except OSError as e:
            logger.debug("Cannot read %s: %s", path, e)
            return None

        if len(data) != end - offset:
            logger.debug("Short read of %s", path)
            return None
        return data

    def write(self, path: str, contents: bytes) -> bool:
        try:
            with open(path, "wb") as f:
                f.write(contents)
        except OSError as e:
            logger.debug("Cannot write %s: %s", path, e)
            return False
        return True

    def copy_file(self, source: str, destination: str) -> bool:
        """Copy a file, preserving metadata when the native path is enabled."""
        if not self.native_copy:
            return super().copy_file(source, destination)

        if self.entry_type(source) is not EntryType.FILE:
            return False

        kind = self.entry_type(destination)
        if kind is EntryType.DIRECTORY:
            return False
        if kind is EntryType.FILE and _same_entry(source, destination):
            return True
        if kind is EntryType.FILE and not self.remove_file(destination):
            return False

        try:
            shutil.copy2(source, destination, follow_symlinks=False)
        except (OSError, shutil.Error) as e:
            logger.debug("Cannot copy %s to %s: %s", source, destination, e)
            return False
        return True

    def remove_file(self, path: str) -> bool:
        if self.entry_type(path) is not EntryType.FILE:
            logger.debug("Cannot remove %s: not a file", path)
            return False

        try:
            os.unlink(path)
        except OSError as e:
            logger.debug("Cannot remove %s: %s", path, e)
            return False
        return True

    # ------------------------------------------------------------------
    # Symbolic links
    # ------------------------------------------------------------------

    def read_symbolic_link(self, path: str) -> str | None:
        try:
            return os.readlink(path)
        except OSError:
            return None

    def write_symbolic_link(self, target: str, path: str) -> bool:
        try:
            os.symlink(target, path)
        except OSError as e:
            logger.debug("Cannot link %s to %s: %s", path, target, e)
            return False
        return True

    def copy_symbolic_link(self, source: str, destination: str) -> bool:
        if not self.native_copy:
            return super().copy_symbolic_link(source, destination)

        if self.entry_type(source) is not EntryType.SYMBOLIC_LINK:
            return False

        if _same_entry(source, destination):
            return True

        if self.entry_type(destination) is EntryType.SYMBOLIC_LINK:
            if not self.remove_symbolic_link(destination):
                return False

        try:
            shutil.copy2(source, destination, follow_symlinks=False)
        except (OSError, shutil.Error) as e:
            logger.debug("Cannot copy link %s to %s: %s", source, destination, e)
            return False
        return True

    def remove_symbolic_link(self, path: str) -> bool:
        if self.entry_type(path) is not EntryType.SYMBOLIC_LINK:
            logger.debug("Cannot remove %s: not a symbolic link", path)
            return False

        try:
            os.unlink(path)
        except OSError as e:
            logger.debug("Cannot remove %s: %s", path, e)
            return False
        return True

    # ------------------------------------------------------------------
    # Directories
    # ------------------------------------------------------------------

    def create_directory(self, path: str, recursive: bool) -> bool:
        """Create a directory, optionally with missing ancestors.

        Missing directories are collected from the deepest up to the first
        existing one, then created shallowest first.
        """
        if os.path.isdir(path):
            return True

        mode = _creation_mode()
        create = [path]
        if recursive:
            current = get_directory_name(path)
            while not os.path.isdir(current):
                create.append(current)
                parent = get_directory_name(current)
                if parent == current:
                    break
                current = parent

        for directory in reversed(create):
            try:
                os.mkdir(directory, mode)
            except OSError as e:
                logger.debug("Cannot create directory %s: %s", directory, e)
                return False
        return True

    def read_directory(self, path: str, recursive: bool, visit: DirectoryVisitor) -> bool:
        """Enumerate a directory.

        Each directory is scanned twice: the first scan reports every entry,
        the second finds subdirectories to descend into. Changes the visitor
        makes to the directory therefore never disturb an open scan.
        """
        return self._read_directory(path, None, recursive, visit)

    def _read_directory(
        self,
        absolute: str,
        relative: str | None,
        recursive: bool,
        visit: DirectoryVisitor,
    ) -> bool:
        try:
            with os.scandir(absolute) as entries:
                for entry in entries:
                    visit(join_path(relative, entry.name) if relative else entry.name)
        except OSError as e:
            logger.debug("Cannot read directory %s: %s", absolute, e)
            return False

        if not recursive:
            return True

        try:
            with os.scandir(absolute) as entries:
                subdirectories = [
                    entry.name for entry in entries if entry.is_dir(follow_symlinks=False)
                ]
        except OSError as e:
            logger.debug("Cannot rescan directory %s: %s", absolute, e)
            return False

        for name in subdirectories:
            child_relative = join_path(relative, name) if relative else name
            if not self._read_directory(join_path(absolute, name), child_relative, True, visit):
                return False
        return True

    def copy_directory(self, source: str, destination: str, recursive: bool) -> bool:
        """Copy a directory, preserving symbolic links and metadata."""
        if not self.native_copy:
            return super().copy_directory(source, destination, recursive)

        if self.entry_type(source) is not EntryType.DIRECTORY:
            return False

        if self._contains(destination, source):
            logger.debug("Cannot copy %s into itself or its ancestor %s", source, destination)
            return False

        if self.entry_type(destination) is EntryType.DIRECTORY:
            if not self.remove_directory(destination, True):
                return False

        top = os.path.normpath(source)

        def _ignore(directory: str, names: list[str]) -> list[str]:
            # Non-recursive copies keep only the top level's entries.
            if recursive or os.path.normpath(directory) == top:
                return []
            return names

        try:
            shutil.copytree(source, destination, symlinks=True, ignore=_ignore)
        except (OSError, shutil.Error) as e:
            logger.debug("Cannot copy directory %s to %s: %s", source, destination, e)
            return False
        return True

    def remove_directory(self, path: str, recursive: bool) -> bool:
        """Remove a directory.

        With ``recursive``, children are removed one by one according to
        their kind before the directory itself. The first failing child
        aborts the removal; children removed before it stay removed.
        """
        if self.entry_type(path) is not EntryType.DIRECTORY:
            logger.debug("Cannot remove %s: not a directory", path)
            return False

        if recursive:
            names = self.list_directory(path)
            if names is None:
                return False

            for name in names:
                if not self._remove_child(join_path(path, name)):
                    logger.debug("Cannot remove %s: child %s failed", path, name)
                    return False

        try:
            os.rmdir(path)
        except OSError as e:
            logger.debug("Cannot remove directory %s: %s", path, e)
            return False
        return True

    def _remove_child(self, path: str) -> bool:
        """Remove one directory child according to its kind."""
        kind = self.entry_type(path)
        if kind is EntryType.FILE:
            return self.remove_file(path)
        if kind is EntryType.SYMBOLIC_LINK:
            return self.remove_symbolic_link(path)
        if kind is EntryType.DIRECTORY:
            return self.remove_directory(path, True)
        return False

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def resolve_path(self, path: str) -> str:
        try:
            return os.path.realpath(path, strict=True)
        except OSError:
            return ""
