"""
Resource file discovery and selection for project trees.
"""

from resource_selector.formats import DEFAULT_FORMATS, ParseContext, ResourceDocument
from resource_selector.selection import ResourceSelector, SelectorConfig

__all__ = [
    "DEFAULT_FORMATS",
    "ParseContext",
    "ResourceDocument",
    "ResourceSelector",
    "SelectorConfig",
]
