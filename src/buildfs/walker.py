"""Path walking over the in-memory entry tree.

Every in-memory operation is a single walk parameterized by a callback.
The callback sees ``(parent, name, entry)`` where ``entry`` is the child
named ``name`` in ``parent`` or None, and returns the entry the walk should
treat as resolved for that step. Returning a new entry implements
create-if-absent, returning None implements reject-if-wrong-kind, and
returning the parent after splicing implements removal.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from buildfs.entry import Entry
from buildfs.paths import is_absolute, normalize_path, split_components

__all__ = ["WalkCallback", "WalkResult", "WalkStatus", "walk_path"]

WalkCallback = Callable[[Entry, str, Entry | None], Entry | None]


class WalkStatus(Enum):
    """Outcome of a path walk."""

    FOUND = "found"
    ABSENT = "absent"
    NOT_A_DIRECTORY = "not_a_directory"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class WalkResult:
    """Result of walking a path.

    Attributes:
        status: How the walk ended.
        entry: Entry resolved by the final callback (FOUND only).
        component: Path component at which the walk stopped.
    """

    status: WalkStatus
    entry: Entry | None = None
    component: str = ""

    def __bool__(self) -> bool:
        return self.status is WalkStatus.FOUND


def walk_path(
    root: Entry,
    path: str,
    all_components: bool,
    callback: WalkCallback,
) -> WalkResult:
    """Walk an absolute path from the root, calling back on each step.

    Args:
        root: Root directory entry.
        path: Absolute path to walk.
        all_components: Call back for every component, not only the last.
        callback: Decision callback ``(parent, name, entry) -> entry``.

    Returns:
        WalkResult describing where and how the walk ended.
    """
    if not is_absolute(path):
        return WalkResult(WalkStatus.MALFORMED, component=path)

    normalized = normalize_path(path)
    if not normalized:
        return WalkResult(WalkStatus.MALFORMED, component=path)

    components = split_components(normalized)
    if not components:
        # The root is its own final component.
        resolved = callback(root, "", root)
        if resolved is None:
            return WalkResult(WalkStatus.ABSENT)
        return WalkResult(WalkStatus.FOUND, entry=resolved)

    current = root
    last = len(components) - 1
    for index, name in enumerate(components):
        final = index == last
        found = current.child(name)

        if all_components or final:
            found = callback(current, name, found)

        if final:
            if found is None:
                return WalkResult(WalkStatus.ABSENT, component=name)
            return WalkResult(WalkStatus.FOUND, entry=found, component=name)

        if found is None:
            return WalkResult(WalkStatus.ABSENT, component=name)
        if not found.is_directory:
            return WalkResult(WalkStatus.NOT_A_DIRECTORY, component=name)

        current = found

    raise AssertionError("unreachable")  # pragma: no cover
