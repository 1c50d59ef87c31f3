"""Configuration types for resource selection."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from resource_selector.selection.defaults import BYTES_PER_MB, SKIP_DIRECTORY_NAMES
from resource_selector.selection.exclusions import merge_exclusions


@dataclass
class SelectorConfig:
    """
    Configuration for resource selection, fixed for the life of a selector.

    `subprojects` are nested build directories; every file under one of them
    is excluded from the enclosing project. `exclusions` are user globs
    matched against paths relative to the base directory.
    `size_threshold_mb <= 0` disables the size limit.
    """

    project_dir: Path = field(default_factory=Path.cwd)
    subprojects: list[Path] = field(default_factory=list)
    exclusions: list[str] = field(default_factory=list)
    size_threshold_mb: int = 0
    skip_directories: frozenset[str] = SKIP_DIRECTORY_NAMES

    @property
    def effective_exclusions(self) -> list[str]:
        """Subproject patterns followed by the user exclusions."""
        return merge_exclusions(self.project_dir, self.subprojects, self.exclusions)

    @property
    def size_threshold_bytes(self) -> int | None:
        """Byte ceiling, or `None` when unlimited."""
        if self.size_threshold_mb <= 0:
            return None
        return self.size_threshold_mb * BYTES_PER_MB
