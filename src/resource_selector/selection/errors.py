"""Exceptions raised by resource selection."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class ResourceSelectionError(Exception):
    """Base class for resource selection failures."""


class ExclusionPatternError(ResourceSelectionError, ValueError):
    """
    An exclusion pattern could not be compiled. This is a configuration error:
    there is no fallback to a partial exclusion list.
    """

    def __init__(self, message: str, patterns: Sequence[str]) -> None:
        super().__init__(message)
        self.patterns: list[str] = list(patterns)


class ResourceWalkError(ResourceSelectionError, OSError):
    """
    A directory listing or metadata read failed during a walk. The original
    `OSError` is chained as `__cause__`.
    """

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"Could not read {path}: {cause.strerror or cause}")
        self.path: Path = path
        self.errno = cause.errno
