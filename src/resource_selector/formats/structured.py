"""JSON, XML and YAML resource formats."""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from typing import Any

import yaml

from resource_selector.formats.base import FileFormat


class JsonFormat(FileFormat):
    name = "json"
    suffixes = frozenset({".json"})

    def parse_text(self, text: str) -> Any:
        return json.loads(text)


class XmlFormat(FileFormat):
    name = "xml"
    suffixes = frozenset(
        {".xml", ".xsd", ".xsl", ".xslt", ".wsdl", ".xmi", ".tld", ".xjb", ".xhtml"}
    )

    def parse_text(self, text: str) -> ET.Element:
        return ET.fromstring(text)


class YamlFormat(FileFormat):
    """YAML streams may hold several documents; content is always a list."""

    name = "yaml"
    suffixes = frozenset({".yml", ".yaml"})

    def parse_text(self, text: str) -> list[Any]:
        return list(yaml.safe_load_all(text))
