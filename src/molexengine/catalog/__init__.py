"""Catalog construction and lookup.

Components:
    parse_catalog - Binary container parser (entry point)
    ParserConfig - Immutable parser options
    Catalog - Immutable lookup structure (gettext/ngettext/pgettext/npgettext)
    Message - One translatable entry
    CatalogMetadata - Parsed header record

Python 3.13+.
"""

from .catalog import Catalog
from .config import ParserConfig
from .message import Message, make_key
from .metadata import CatalogMetadata, extract_metadata, parse_plural_forms
from .parser import ByteSource, parse_catalog

__all__ = [
    "ByteSource",
    "Catalog",
    "CatalogMetadata",
    "Message",
    "ParserConfig",
    "extract_metadata",
    "make_key",
    "parse_catalog",
    "parse_plural_forms",
]
