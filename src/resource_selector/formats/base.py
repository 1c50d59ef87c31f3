"""
The format recognizer contract: a predicate deciding whether a path belongs to
a format, and a batch parser turning selected paths into documents.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol


@dataclass
class ParseContext:
    """Settings shared by all parsers during one parsing sweep."""

    encoding: str = "utf-8"


@dataclass(frozen=True)
class ResourceDocument:
    """
    A parsed resource file. `path` is the selected filesystem path and
    `source_path` is that path relative to the base directory.
    """

    format: str
    path: Path
    source_path: Path
    content: Any


class ResourceFormat(Protocol):
    """A resource format: recognizes paths and parses batches of them."""

    name: str

    def accepts(self, path: Path) -> bool: ...

    def parse(
        self, paths: Sequence[Path], base_dir: Path, ctx: ParseContext
    ) -> list[ResourceDocument]: ...


class FileFormat:
    """
    Base for formats recognized by file name. Subclasses set `suffixes`
    (lowercase, with dot) and optionally `filenames`, and implement
    `parse_text()`.
    """

    name: str = ""
    suffixes: frozenset[str] = frozenset()
    filenames: frozenset[str] = frozenset()

    def accepts(self, path: Path) -> bool:
        name = path.name.lower()
        return name in self.filenames or path.suffix.lower() in self.suffixes

    def parse(
        self, paths: Sequence[Path], base_dir: Path, ctx: ParseContext
    ) -> list[ResourceDocument]:
        documents: list[ResourceDocument] = []
        for path in paths:
            text = Path(path).read_text(encoding=ctx.encoding)
            documents.append(
                ResourceDocument(
                    format=self.name,
                    path=Path(path),
                    source_path=Path(os.path.relpath(path, base_dir)),
                    content=self.parse_text(text),
                )
            )
        return documents

    def parse_text(self, text: str) -> Any:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
