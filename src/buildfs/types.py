"""Shared data types for buildfs."""

from __future__ import annotations

from enum import Enum

__all__ = ["EntryType"]


class EntryType(Enum):
    """Kind of entry found at a path.

    Attributes:
        FILE: Regular file holding bytes.
        SYMBOLIC_LINK: Symbolic link holding a target string.
        DIRECTORY: Directory holding named children.
    """

    FILE = "file"
    SYMBOLIC_LINK = "symlink"
    DIRECTORY = "directory"
