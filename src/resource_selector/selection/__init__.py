"""
Resource file selection: a depth-bounded walk that decides, per format, which
files under a project directory are resources to parse.

Usage::

    from resource_selector.selection import ResourceSelector, SelectorConfig

    config = SelectorConfig(
        project_dir=Path("/repo"),
        subprojects=[Path("sub")],
        exclusions=["**/secrets.yaml"],
        size_threshold_mb=1,
    )
    selector = ResourceSelector(config)
    inputs = selector.enumerate(Path("/repo"), Path("/repo"))

    claimed: set[Path] = set()
    documents = selector.select_and_parse(Path("/repo"), Path("/repo"), claimed)
"""

from resource_selector.selection.defaults import MAX_WALK_DEPTH, SKIP_DIRECTORY_NAMES
from resource_selector.selection.errors import (
    ExclusionPatternError,
    ResourceSelectionError,
    ResourceWalkError,
)
from resource_selector.selection.exclusions import ExclusionPolicy, merge_exclusions
from resource_selector.selection.predicate import PathQualifier
from resource_selector.selection.selector import ResourceSelector
from resource_selector.selection.types import SelectorConfig
from resource_selector.selection.walker import walk_tree

__all__ = [
    "MAX_WALK_DEPTH",
    "SKIP_DIRECTORY_NAMES",
    "ExclusionPatternError",
    "ExclusionPolicy",
    "PathQualifier",
    "ResourceSelectionError",
    "ResourceSelector",
    "ResourceWalkError",
    "SelectorConfig",
    "merge_exclusions",
    "walk_tree",
]
