"""
ResourceSelector: main entry point for resource selection.

Walks a search directory once per registered format, applying skip rules,
exclusion patterns and the size threshold, and either lists the qualifying
paths or claims and parses them.
"""

from __future__ import annotations

import logging
from collections.abc import MutableSet, Sequence
from pathlib import Path

from resource_selector.formats import (
    DEFAULT_FORMATS,
    ParseContext,
    ResourceDocument,
    ResourceFormat,
)
from resource_selector.selection.errors import ResourceWalkError
from resource_selector.selection.exclusions import ExclusionPolicy
from resource_selector.selection.predicate import PathQualifier
from resource_selector.selection.types import SelectorConfig
from resource_selector.selection.walker import walk_tree

logger = logging.getLogger("resource_selector.selection")


class ResourceSelector:
    """
    Selects resource files under a search directory for each format in a
    fixed, ordered registry.

    Exclusions (subproject boundaries plus user globs) and the size threshold
    are fixed at construction. Skip-directory names are matched against path
    segments relative to the search directory, while exclusion globs are
    matched against paths relative to the base directory.
    """

    def __init__(
        self,
        config: SelectorConfig,
        formats: Sequence[ResourceFormat] = DEFAULT_FORMATS,
    ) -> None:
        self._config: SelectorConfig = config
        self._formats: tuple[ResourceFormat, ...] = tuple(formats)
        self._exclusions: ExclusionPolicy = ExclusionPolicy(config.effective_exclusions)

    @property
    def formats(self) -> tuple[ResourceFormat, ...]:
        return self._formats

    @property
    def exclusions(self) -> list[str]:
        return self._exclusions.patterns

    @property
    def size_threshold_mb(self) -> int:
        return self._config.size_threshold_mb

    def enumerate(self, base_dir: Path, search_dir: Path) -> list[Path]:
        """
        List the paths every format would select, in registry order. Has no
        side effects, so the result is suitable as a cache fingerprint input.
        """
        sources: list[Path] = []
        for fmt in self._formats:
            sources.extend(self.list_sources(fmt, base_dir, search_dir))
        return sources

    def select_and_parse(
        self,
        base_dir: Path,
        search_dir: Path,
        claimed: MutableSet[Path],
        ctx: ParseContext | None = None,
    ) -> list[ResourceDocument]:
        """
        Claim and parse resources for every format, in registry order.

        `claimed` is owned by the caller and shared across formats (and across
        calls in one sweep): paths already in it are skipped, and every path
        selected, excluded or rejected for size is added to it. The first walk
        or parser failure is raised; no partial result is returned.
        """
        if ctx is None:
            ctx = ParseContext()
        documents: list[ResourceDocument] = []
        for fmt in self._formats:
            documents.extend(self.parse_sources(fmt, base_dir, search_dir, claimed, ctx))
        return documents

    def list_sources(self, fmt: ResourceFormat, base_dir: Path, search_dir: Path) -> list[Path]:
        """Paths under `search_dir` that `fmt` would select, without claiming any."""
        qualifier = self._qualifier(fmt, base_dir, search_dir, claimed=None)
        return self._walk(fmt, search_dir, qualifier)

    def parse_sources(
        self,
        fmt: ResourceFormat,
        base_dir: Path,
        search_dir: Path,
        claimed: MutableSet[Path],
        ctx: ParseContext,
    ) -> list[ResourceDocument]:
        """Select paths for one format, claim them all, then parse them as one batch."""
        qualifier = self._qualifier(fmt, base_dir, search_dir, claimed=claimed)
        resource_files = self._walk(fmt, search_dir, qualifier)
        # Claim before parsing so a parser failure still records the attempt.
        for path in resource_files:
            claimed.add(path)
        logger.debug("Selected %d %s file(s) under %s", len(resource_files), fmt.name, search_dir)
        return fmt.parse(resource_files, Path(base_dir), ctx)

    def _qualifier(
        self,
        fmt: ResourceFormat,
        base_dir: Path,
        search_dir: Path,
        claimed: MutableSet[Path] | None,
    ) -> PathQualifier:
        return PathQualifier(
            fmt,
            base_dir=Path(base_dir),
            search_dir=Path(search_dir),
            exclusions=self._exclusions,
            size_threshold_bytes=self._config.size_threshold_bytes,
            skip_directories=self._config.skip_directories,
            claimed=claimed,
        )

    def _walk(self, fmt: ResourceFormat, search_dir: Path, qualifier: PathQualifier) -> list[Path]:
        try:
            return walk_tree(Path(search_dir), qualifier)
        except ResourceWalkError as e:
            logger.error(
                "Failed to walk %s for %s resources: %s", search_dir, fmt.name, e, exc_info=e
            )
            raise
