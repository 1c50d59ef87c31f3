"""
Depth-bounded directory walk that applies a predicate to every entry.
"""

from __future__ import annotations

import os
import stat
from collections.abc import Callable
from pathlib import Path

from resource_selector.selection.defaults import MAX_WALK_DEPTH
from resource_selector.selection.errors import ResourceWalkError

EntryPredicate = Callable[[Path, os.stat_result], bool]


def walk_tree(
    root: Path, predicate: EntryPredicate, max_depth: int = MAX_WALK_DEPTH
) -> list[Path]:
    """
    Walk `root` depth-first and return every entry accepted by `predicate`,
    including `root` itself (depth 0). Directories are not descended below
    `max_depth`, and symlinked directories are not followed.

    Entries are visited in name order within each directory, so repeated walks
    over an unchanged tree give identical results. Each directory is listed
    exactly once. Any `OSError` is raised as `ResourceWalkError`.
    """
    root = Path(root)
    try:
        root_stat = root.stat()
    except OSError as e:
        raise ResourceWalkError(root, e) from e

    found: list[Path] = []
    if predicate(root, root_stat):
        found.append(root)
    if stat.S_ISDIR(root_stat.st_mode) and max_depth > 0:
        _walk_directory(root, 1, max_depth, predicate, found)
    return found


def _walk_directory(
    directory: Path,
    depth: int,
    max_depth: int,
    predicate: EntryPredicate,
    found: list[Path],
) -> None:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        raise ResourceWalkError(directory, e) from e

    for entry in entries:
        path = directory / entry.name
        try:
            entry_stat = entry.stat(follow_symlinks=False)
        except OSError as e:
            raise ResourceWalkError(path, e) from e

        if predicate(path, entry_stat):
            found.append(path)
        if depth < max_depth and stat.S_ISDIR(entry_stat.st_mode):
            _walk_directory(path, depth + 1, max_depth, predicate, found)
