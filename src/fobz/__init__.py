"""Read and write .fobz document archives."""

from fobz.core.document import AddOutcome, FobzDocument
from fobz.errors import ArchiveIOError, FobzError, FormatError
from fobz.models import (
    ContentInfo,
    Manifest,
    ResourceInfo,
    StyleInfo,
    TableOfContents,
    TableOfResources,
    TableOfStyles,
)

__all__ = [
    "FobzDocument",
    "AddOutcome",
    # Models
    "Manifest",
    "ContentInfo",
    "ResourceInfo",
    "StyleInfo",
    "TableOfContents",
    "TableOfResources",
    "TableOfStyles",
    # Errors
    "FobzError",
    "ArchiveIOError",
    "FormatError",
]
