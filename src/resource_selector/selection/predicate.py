"""
The path qualification predicate: decides whether a walked entry is selected
for a format, and in parse mode records claimed paths as a side effect.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import MutableSet
from pathlib import Path

from resource_selector.formats.base import ResourceFormat
from resource_selector.selection.defaults import BYTES_PER_MB, SKIP_DIRECTORY_NAMES
from resource_selector.selection.exclusions import ExclusionPolicy

logger = logging.getLogger("resource_selector.selection")


class PathQualifier:
    """
    Entry predicate for one format over one search root.

    With `claimed=None` (enumeration mode) the predicate is pure. With a
    claimed-path set (parse mode), paths rejected by an exclusion pattern or
    by the size threshold are added to the set, and paths already in it are
    rejected.

    Checks run cheapest first and in a fixed order, since the later ones
    mutate the claimed set:

    1. format does not accept the path
    2. a path segment below the search root is a skip-directory name
    3. not a regular file, or empty
    4. already claimed (parse mode)
    5. matches an exclusion pattern (claims in parse mode)
    6. larger than the size threshold (claims and logs in parse mode)
    """

    def __init__(
        self,
        fmt: ResourceFormat,
        base_dir: Path,
        search_dir: Path,
        exclusions: ExclusionPolicy,
        size_threshold_bytes: int | None = None,
        skip_directories: frozenset[str] = SKIP_DIRECTORY_NAMES,
        claimed: MutableSet[Path] | None = None,
    ) -> None:
        self.format: ResourceFormat = fmt
        self.base_dir: Path = Path(base_dir)
        self.search_dir: Path = Path(search_dir)
        self.exclusions: ExclusionPolicy = exclusions
        # None disables the size limit.
        self.size_threshold_bytes: int | None = size_threshold_bytes
        self.skip_directories: frozenset[str] = skip_directories
        self.claimed: MutableSet[Path] | None = claimed

    @property
    def parse_mode(self) -> bool:
        return self.claimed is not None

    def __call__(self, path: Path, entry_stat: os.stat_result) -> bool:
        if not self.format.accepts(path):
            return False

        if self._in_skipped_directory(path):
            return False

        size = entry_stat.st_size
        if not stat.S_ISREG(entry_stat.st_mode) or size == 0:
            return False

        if self.claimed is not None and path in self.claimed:
            return False

        if self.exclusions.matches(self.base_dir, path):
            if self.claimed is not None:
                self.claimed.add(path)
                logger.debug("Excluding %s", path)
            return False

        if self.size_threshold_bytes is not None and size > self.size_threshold_bytes:
            if self.claimed is not None:
                self.claimed.add(path)
                logger.info(
                    "Skipping parsing %s as its size %sMb exceeds size threshold %sMb",
                    path,
                    size // BYTES_PER_MB,
                    self.size_threshold_bytes // BYTES_PER_MB,
                )
            return False

        return True

    def _in_skipped_directory(self, path: Path) -> bool:
        # Segments are relative to the search root, not the base directory.
        try:
            parts = path.relative_to(self.search_dir).parts
        except ValueError:
            parts = Path(os.path.relpath(path, self.search_dir)).parts
        return any(part in self.skip_directories for part in parts)
