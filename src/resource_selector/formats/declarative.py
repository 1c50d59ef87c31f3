"""
Protocol buffer schema and HCL (Terraform) resource formats.

Both are kept as source text, with their top-level declarations indexed so
callers can locate messages, services and blocks without a full grammar.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from resource_selector.formats.base import FileFormat

_LINE_COMMENT = re.compile(r"(//|#).*$", re.MULTILINE)
_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)


def _strip_comments(text: str) -> str:
    return _LINE_COMMENT.sub("", _BLOCK_COMMENT.sub("", text))


@dataclass
class ProtoSchema:
    text: str
    syntax: str | None = None
    package: str | None = None
    imports: list[str] = field(default_factory=list)
    # (kind, name), e.g. ("message", "Person")
    declarations: list[tuple[str, str]] = field(default_factory=list)


_PROTO_SYNTAX = re.compile(r'^\s*(?:syntax|edition)\s*=\s*"([^"]+)"\s*;', re.MULTILINE)
_PROTO_PACKAGE = re.compile(r"^\s*package\s+([\w.]+)\s*;", re.MULTILINE)
_PROTO_IMPORT = re.compile(r'^\s*import\s+(?:public\s+|weak\s+)?"([^"]+)"\s*;', re.MULTILINE)
_PROTO_DECLARATION = re.compile(
    r"^\s*(message|enum|service|extend)\s+([\w.]+)\s*\{", re.MULTILINE
)


def parse_proto(text: str) -> ProtoSchema:
    code = _strip_comments(text)
    syntax = _PROTO_SYNTAX.search(code)
    package = _PROTO_PACKAGE.search(code)
    return ProtoSchema(
        text=text,
        syntax=syntax.group(1) if syntax else None,
        package=package.group(1) if package else None,
        imports=_PROTO_IMPORT.findall(code),
        declarations=[(m.group(1), m.group(2)) for m in _PROTO_DECLARATION.finditer(code)],
    )


class ProtoFormat(FileFormat):
    name = "proto"
    suffixes = frozenset({".proto"})

    def parse_text(self, text: str) -> ProtoSchema:
        return parse_proto(text)


@dataclass
class HclConfig:
    text: str
    # (block type, labels), e.g. ("resource", ["aws_s3_bucket", "logs"])
    blocks: list[tuple[str, list[str]]] = field(default_factory=list)


_HCL_BLOCK = re.compile(
    r'^([A-Za-z_][\w-]*)((?:[ \t]+(?:"[^"]*"|[A-Za-z_][\w-]*))*)[ \t]*\{', re.MULTILINE
)
_HCL_LABEL = re.compile(r'"([^"]*)"|([A-Za-z_][\w-]*)')


def parse_hcl(text: str) -> HclConfig:
    """Index top-level blocks (those starting at column 0)."""
    blocks: list[tuple[str, list[str]]] = []
    for m in _HCL_BLOCK.finditer(_strip_comments(text)):
        labels = [quoted or bare for quoted, bare in _HCL_LABEL.findall(m.group(2))]
        blocks.append((m.group(1), labels))
    return HclConfig(text=text, blocks=blocks)


class HclFormat(FileFormat):
    name = "hcl"
    suffixes = frozenset({".tf", ".tfvars", ".hcl"})

    def parse_text(self, text: str) -> HclConfig:
        return parse_hcl(text)
