"""Index tables for contents, resources and styles.

Each table maps an archive path to a descriptive record and keeps the order in
which records were added. That order is the display order of the document
(reading order for contents). The three tables only differ in their record type
and the key used in their JSON file.
"""

import logging
from typing import ClassVar, Generic, Iterable, Iterator, TypeVar

from pydantic import AliasChoices, BaseModel, Field

log = logging.getLogger(__name__)


class EntryInfo(BaseModel):
    """Record describing a single archive entry."""

    path: str


class ContentInfo(EntryInfo):
    """A section of the document."""

    title: str


class ResourceInfo(EntryInfo):
    """A binary resource such as an image."""

    name: str  # shown when the resource cannot be rendered


class StyleInfo(EntryInfo):
    """A stylesheet."""


class ContentsFile(BaseModel):
    """Shape of toc.json."""

    # Older writers stored the list under "sections".
    contents: list[ContentInfo] = Field(
        validation_alias=AliasChoices("contents", "sections")
    )


class ResourcesFile(BaseModel):
    """Shape of tor.json."""

    resources: list[ResourceInfo]


class StylesFile(BaseModel):
    """Shape of tos.json."""

    styles: list[StyleInfo]


R = TypeVar("R", bound=EntryInfo)


class IndexTable(Generic[R]):
    """Insertion-ordered mapping of archive path to record."""

    key: ClassVar[str]
    file_model: ClassVar[type[BaseModel]]

    def __init__(self, records: Iterable[R] = ()):
        self._records: dict[str, R] = {}
        for record in records:
            if record.path in self._records:
                log.warning(
                    "Duplicate %s entry for %s, keeping the first one",
                    self.key,
                    record.path,
                )
                continue
            self._records[record.path] = record

    def get(self, path: str) -> R | None:
        """Return the record stored for `path`, if any."""
        return self._records.get(path)

    def add(self, record: R) -> bool:
        """Insert a record, replacing any record with the same path.

        A replaced record keeps its position in the table.

        Returns:
            True if a record for the same path was replaced
        """
        replaced = record.path in self._records
        self._records[record.path] = record
        return replaced

    def remove(self, path: str) -> None:
        """Remove the record for `path`. Missing paths are ignored."""
        self._records.pop(path, None)

    def paths(self) -> list[str]:
        return list(self._records)

    def __contains__(self, path: object) -> bool:
        return path in self._records

    def __iter__(self) -> Iterator[R]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return list(self) == list(other)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"

    def to_json(self) -> str:
        """Serialize the table as pretty-printed JSON."""
        return self.file_model(**{self.key: list(self)}).model_dump_json(indent=2)

    @classmethod
    def from_json(cls, data: str | bytes):
        """Build a table from its JSON file.

        Raises:
            pydantic.ValidationError: If the JSON does not match the table shape
        """
        parsed = cls.file_model.model_validate_json(data)
        return cls(getattr(parsed, cls.key))


class TableOfContents(IndexTable[ContentInfo]):
    """Sections of the document in reading order (toc.json)."""

    key = "contents"
    file_model = ContentsFile


class TableOfResources(IndexTable[ResourceInfo]):
    """Resources used by the document (tor.json)."""

    key = "resources"
    file_model = ResourcesFile


class TableOfStyles(IndexTable[StyleInfo]):
    """Stylesheets used by the document (tos.json)."""

    key = "styles"
    file_model = StylesFile
