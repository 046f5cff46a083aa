"""Path string helpers shared by every filesystem implementation.

Paths handled here are plain ``/``-separated strings rather than
``pathlib.Path`` objects, so the same rules apply to the real and the
in-memory filesystem regardless of host platform.
"""

from __future__ import annotations

SEPARATOR = "/"


def is_absolute(path: str) -> bool:
    """Check if a path starts at the root."""
    return path.startswith(SEPARATOR)


def normalize_path(path: str) -> str:
    """Collapse redundant separators and ``.``/``..`` components.

    A ``..`` at the root stays at the root. Relative paths keep leading
    ``..`` components they cannot collapse.

    Args:
        path: Path to normalize.

    Returns:
        Normalized path, or an empty string for empty input.

    Example:
        >>> normalize_path("/a//b/./c/../d/")
        '/a/b/d'
    """
    if not path:
        return ""

    absolute = is_absolute(path)
    components: list[str] = []
    for component in path.split(SEPARATOR):
        if component in ("", "."):
            continue
        if component == "..":
            if components and components[-1] != "..":
                components.pop()
            elif not absolute:
                components.append(component)
            continue
        components.append(component)

    joined = SEPARATOR.join(components)
    if absolute:
        return SEPARATOR + joined
    return joined or "."


def split_components(normalized: str) -> list[str]:
    """Split a normalized absolute path into its components.

    The root path has no components.
    """
    return [component for component in normalized.split(SEPARATOR) if component]


def get_directory_name(path: str) -> str:
    """Get the parent directory of a path.

    Args:
        path: Absolute or relative path.

    Returns:
        Parent directory, ``/`` for top-level absolute paths, or ``.`` for a
        bare relative name.
    """
    trimmed = path.rstrip(SEPARATOR)
    if not trimmed:
        return SEPARATOR if is_absolute(path) else "."

    index = trimmed.rfind(SEPARATOR)
    if index < 0:
        return "."
    if index == 0:
        return SEPARATOR
    return trimmed[:index].rstrip(SEPARATOR) or SEPARATOR


def get_base_name(path: str) -> str:
    """Get the final component of a path."""
    trimmed = path.rstrip(SEPARATOR)
    return trimmed[trimmed.rfind(SEPARATOR) + 1 :]


def join_path(directory: str, name: str) -> str:
    """Join a directory and a relative name with exactly one separator."""
    if not directory:
        return name
    if not name:
        return directory
    return directory.rstrip(SEPARATOR) + SEPARATOR + name.lstrip(SEPARATOR)
