"""
Resource formats and the default format registry.

`DEFAULT_FORMATS` is ordered: selection runs one pass per format in this order,
and a path claimed by an earlier format is never offered to a later one.
Adding a format means appending an instance here.
"""

from resource_selector.formats.base import (
    FileFormat,
    ParseContext,
    ResourceDocument,
    ResourceFormat,
)
from resource_selector.formats.declarative import HclFormat, ProtoFormat
from resource_selector.formats.properties import PropertiesFormat
from resource_selector.formats.structured import JsonFormat, XmlFormat, YamlFormat

DEFAULT_FORMATS: tuple[ResourceFormat, ...] = (
    JsonFormat(),
    XmlFormat(),
    YamlFormat(),
    PropertiesFormat(),
    ProtoFormat(),
    HclFormat(),
)

__all__ = [
    "DEFAULT_FORMATS",
    "FileFormat",
    "HclFormat",
    "JsonFormat",
    "ParseContext",
    "PropertiesFormat",
    "ProtoFormat",
    "ResourceDocument",
    "ResourceFormat",
    "XmlFormat",
    "YamlFormat",
]
