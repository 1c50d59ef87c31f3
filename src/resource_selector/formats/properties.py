"""Java-style `.properties` resource format."""

from __future__ import annotations

import re

from resource_selector.formats.base import FileFormat

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_HEX4 = re.compile(r"[0-9a-fA-F]{4}")
_WHITESPACE = " \t\f"


def _logical_lines(text: str) -> list[str]:
    """Join continuation lines (an odd number of trailing backslashes)."""
    lines: list[str] = []
    pending = ""
    for raw in text.splitlines():
        line = raw.lstrip(_WHITESPACE) if pending else raw
        if not pending and (not line.strip() or line.lstrip()[:1] in ("#", "!")):
            continue
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending += line[:-1]
            continue
        lines.append(pending + line)
        pending = ""
    if pending:
        lines.append(pending)
    return lines


def _unescape(value: str) -> str:
    out: list[str] = []
    i = 0
    while i < len(value):
        c = value[i]
        if c != "\\" or i + 1 == len(value):
            out.append(c)
            i += 1
            continue
        nxt = value[i + 1]
        code = value[i + 2 : i + 6]
        if nxt == "u" and _HEX4.fullmatch(code):
            out.append(chr(int(code, 16)))
            i += 6
        else:
            out.append(_ESCAPES.get(nxt, nxt))
            i += 2
    return "".join(out)


def _split_entry(line: str) -> tuple[str, str]:
    """Split at the first unescaped `=`, `:` or whitespace."""
    line = line.lstrip(_WHITESPACE)
    i = 0
    while i < len(line):
        c = line[i]
        if c == "\\":
            i += 2
            continue
        if c in "=:" or c in _WHITESPACE:
            break
        i += 1
    key = line[:i]
    rest = line[i:].lstrip(_WHITESPACE)
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip(_WHITESPACE)
    return _unescape(key), _unescape(rest)


def parse_properties(text: str) -> dict[str, str]:
    """Parse properties text into an ordered key/value mapping. Later keys win."""
    entries: dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_entry(line)
        entries[key] = value
    return entries


class PropertiesFormat(FileFormat):
    name = "properties"
    suffixes = frozenset({".properties"})

    def parse_text(self, text: str) -> dict[str, str]:
        return parse_properties(text)
