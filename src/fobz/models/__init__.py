"""Data models."""

from fobz.models.manifest import FORMAT_VERSION, Manifest
from fobz.models.tables import (
    ContentInfo,
    EntryInfo,
    IndexTable,
    ResourceInfo,
    StyleInfo,
    TableOfContents,
    TableOfResources,
    TableOfStyles,
)

__all__ = [
    # Manifest
    "FORMAT_VERSION",
    "Manifest",
    # Records
    "EntryInfo",
    "ContentInfo",
    "ResourceInfo",
    "StyleInfo",
    # Tables
    "IndexTable",
    "TableOfContents",
    "TableOfResources",
    "TableOfStyles",
]
