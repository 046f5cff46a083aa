"""Filesystem abstraction with real-OS and in-memory implementations."""

__version__ = "0.1.0"

# Export the contract and implementations for type hints and dependency injection
from buildfs.entry import Entry
from buildfs.filesystem import RealFileSystem
from buildfs.memory import MemoryFileSystem
from buildfs.protocols import DirectoryVisitor, FileSystem
from buildfs.types import EntryType

__all__ = [
    "__version__",
    "DirectoryVisitor",
    "Entry",
    "EntryType",
    "FileSystem",
    "MemoryFileSystem",
    "RealFileSystem",
]
