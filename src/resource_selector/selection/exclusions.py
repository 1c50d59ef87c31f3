"""
Exclusion patterns: composition from subproject boundaries and user globs,
and matching with gitignore-style wildcards via pathspec.

Every pattern excludes. A leading `!` or `#` is a literal character, never a
negation or a comment, so the order of the combined list does not matter.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from pathlib import Path

import pathspec
from pathspec.patterns import GitWildMatchPattern

from resource_selector.selection.errors import ExclusionPatternError


def subproject_exclusions(project_dir: Path, subprojects: Iterable[Path]) -> list[str]:
    """
    One `<relative-dir>/**` pattern per subproject, relative to `project_dir`.
    Relative subproject paths are taken as already relative to `project_dir`.
    The directory part is escaped, so names like `#legacy` or `[v1]` match
    literally.
    """
    patterns: list[str] = []
    for subproject in subprojects:
        rel = Path(os.path.relpath(Path(project_dir) / subproject, project_dir)).as_posix()
        # A subproject at the project root itself contains everything.
        patterns.append("**" if rel == "." else f"{GitWildMatchPattern.escape(rel)}/**")
    return patterns


def merge_exclusions(
    project_dir: Path, subprojects: Iterable[Path], exclusions: Iterable[str]
) -> list[str]:
    """
    Combined exclusion list: subproject patterns first, then user patterns
    verbatim in their given order. No deduplication; matching is a disjunction.
    """
    return subproject_exclusions(project_dir, subprojects) + list(exclusions)


def _literal_prefix(pattern: str) -> str:
    # `!` negates and `#` comments out a gitignore line; here both are plain characters.
    if pattern.startswith(("!", "#")):
        return "\\" + pattern
    return pattern


class ExclusionPolicy:
    """
    Compiled exclusion patterns. Patterns are compiled on first use, so an
    invalid pattern fails when exclusions are first evaluated.
    """

    def __init__(self, patterns: Sequence[str]) -> None:
        self._patterns: list[str] = list(patterns)
        self._spec: pathspec.PathSpec | None = None

    @property
    def patterns(self) -> list[str]:
        return list(self._patterns)

    def __bool__(self) -> bool:
        return bool(self._patterns)

    def _compiled(self) -> pathspec.PathSpec:
        if self._spec is None:
            try:
                self._spec = pathspec.GitIgnoreSpec.from_lines(
                    [_literal_prefix(p) for p in self._patterns]
                )
            except (ValueError, TypeError) as e:
                raise ExclusionPatternError(
                    f"Invalid exclusion pattern: {e}", self._patterns
                ) from e
        return self._spec

    def matches(self, base_dir: Path, path: Path) -> bool:
        """True if `path`, relativized to `base_dir`, matches any pattern."""
        if not self._patterns:
            return False
        rel = Path(os.path.relpath(path, base_dir)).as_posix()
        return self._compiled().match_file(rel)
