"""Seed trees for the in-memory filesystem.

A seed is a nested mapping: a mapping value is a directory, a string or
bytes value is a file, and None is an empty file.

    usr:
      bin:
        tool: "#!/bin/sh\\n"
    tmp: {}
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from buildfs.config import ConfigError
from buildfs.entry import Entry


def entries_from_mapping(mapping: Mapping[str, Any]) -> list[Entry]:
    """Build entries from a nested mapping.

    Args:
        mapping: Names mapped to file contents or nested mappings.

    Returns:
        Top-level entries, in mapping order.

    Raises:
        ValueError: If a value has an unsupported type or a name is invalid.
    """
    entries = []
    for name, value in mapping.items():
        if isinstance(value, Mapping):
            entries.append(Entry.directory(str(name), entries_from_mapping(value)))
        elif isinstance(value, bytes):
            entries.append(Entry.file(str(name), value))
        elif isinstance(value, str):
            entries.append(Entry.file(str(name), value.encode("utf-8")))
        elif value is None:
            entries.append(Entry.file(str(name)))
        else:
            raise ValueError(f"Unsupported seed value for '{name}': {type(value).__name__}")
    return entries


def load_seed(path: Path) -> list[Entry]:
    """Load seed entries from a YAML document.

    Args:
        path: Path to the YAML fixture.

    Returns:
        Top-level entries.

    Raises:
        ConfigError: If the file cannot be read or does not describe a tree.
    """
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot load seed {path}: {e}") from e

    if not isinstance(data, Mapping):
        raise ConfigError(f"Seed {path} must be a mapping of names")

    try:
        return entries_from_mapping(data)
    except ValueError as e:
        raise ConfigError(f"Invalid seed {path}: {e}") from e
