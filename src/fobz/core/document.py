"""The .fobz document: metadata, index tables and payloads."""

import logging
from enum import Enum
from pathlib import Path

from fobz import defaults
from fobz.core.archive import (
    CONTENT_EXTENSION,
    RESOURCE_EXTENSIONS,
    STYLE_EXTENSION,
    ArchivePayload,
    EntryKind,
    classify_entry,
    read_archive,
    write_archive,
)
from fobz.models.manifest import Manifest
from fobz.models.tables import (
    ContentInfo,
    ResourceInfo,
    StyleInfo,
    TableOfContents,
    TableOfResources,
    TableOfStyles,
)

log = logging.getLogger(__name__)


class AddOutcome(str, Enum):
    """Result of adding an entry to a document."""

    ADDED = "added"
    REPLACED = "replaced"
    REJECTED = "rejected"  # wrong extension, document unchanged


class FobzDocument:
    """A .fobz document.

    Owns the manifest, the three index tables and the three payload maps
    (HTML contents, binary resources, CSS styles) keyed by archive path.
    The `add_*`/`remove_*` methods keep every table in sync with its payload
    map. Mutating `contents`, `resources` or `styles` directly bypasses that.
    """

    EXTENSION = ".fobz"

    def __init__(
        self,
        title: str = "",
        author: str = "",
        description: str = "",
        tags: list[str] | None = None,
    ):
        self.manifest = Manifest.create(title, author, description, tags)
        self.toc = TableOfContents()
        self.tor = TableOfResources()
        self.tos = TableOfStyles()
        self.contents: dict[str, str] = {defaults.NO_SECTION_PATH: defaults.no_section()}
        self.resources: dict[str, bytes] = {defaults.NO_COVER_PATH: defaults.no_cover()}
        self.styles: dict[str, str] = {}

    @classmethod
    def open(cls, path: str | Path) -> "FobzDocument":
        """Open an existing .fobz archive.

        Table entries without a matching payload are not an error here;
        `get_content`, `get_resource` and `get_style` return None for them.

        Raises:
            ArchiveIOError: If the file cannot be opened as a ZIP archive
            FormatError: If a metadata entry is missing or malformed
        """
        payload = read_archive(Path(path))

        document = cls()
        document.manifest = payload.manifest
        document.toc = payload.toc
        document.tor = payload.tor
        document.tos = payload.tos
        document.contents = payload.contents
        document.resources = payload.resources
        document.styles = payload.styles
        return document

    def save_to(self, path: str | Path) -> Path:
        """Save the document, appending the .fobz extension if missing.

        Returns:
            Path the archive was written to

        Raises:
            FormatError: If an entry cannot be encoded
            ArchiveIOError: If the archive cannot be written
        """
        name = str(path)
        if not name.endswith(self.EXTENSION):
            name += self.EXTENSION
        path = Path(name)

        write_archive(
            path,
            ArchivePayload(
                manifest=self.manifest,
                toc=self.toc,
                tor=self.tor,
                tos=self.tos,
                contents=self.contents,
                resources=self.resources,
                styles=self.styles,
            ),
        )
        return path

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def add_content(self, path: str, title: str, content: str) -> AddOutcome:
        """Add or replace an HTML section. Paths must end with `.html`."""
        if not path.endswith(CONTENT_EXTENSION):
            return AddOutcome.REJECTED

        self._warn_if_not_loadable(path, EntryKind.CONTENT)
        self.contents[path] = content
        return self._outcome(self.toc.add(ContentInfo(path=path, title=title)))

    def remove_content(self, path: str) -> None:
        self.contents.pop(path, None)
        self.toc.remove(path)

    def add_resource(self, path: str, name: str, resource: bytes) -> AddOutcome:
        """Add or replace an image. Paths must end with `.jpg` or `.png`."""
        if not path.endswith(RESOURCE_EXTENSIONS):
            return AddOutcome.REJECTED

        self._warn_if_not_loadable(path, EntryKind.RESOURCE)
        self.resources[path] = bytes(resource)
        return self._outcome(self.tor.add(ResourceInfo(path=path, name=name)))

    def remove_resource(self, path: str) -> None:
        self.resources.pop(path, None)
        self.tor.remove(path)

    def add_style(self, path: str, style: str) -> AddOutcome:
        """Add or replace a stylesheet. Paths must end with `.css`."""
        if not path.endswith(STYLE_EXTENSION):
            return AddOutcome.REJECTED

        self._warn_if_not_loadable(path, EntryKind.STYLE)
        self.styles[path] = style
        return self._outcome(self.tos.add(StyleInfo(path=path)))

    def remove_style(self, path: str) -> None:
        self.styles.pop(path, None)
        self.tos.remove(path)

    @staticmethod
    def _outcome(replaced: bool) -> AddOutcome:
        return AddOutcome.REPLACED if replaced else AddOutcome.ADDED

    @staticmethod
    def _warn_if_not_loadable(path: str, kind: EntryKind) -> None:
        if classify_entry(path) is not kind:
            log.warning(
                "%s will not be loaded back as %s when the archive is opened",
                path,
                kind.value,
            )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_manifest(self) -> Manifest:
        return self.manifest

    def get_content_info(self, path: str) -> ContentInfo | None:
        return self.toc.get(path)

    def get_content(self, path: str) -> tuple[ContentInfo, str] | None:
        """Return the section info and its HTML, or None unless both exist."""
        info = self.toc.get(path)
        if info is None or path not in self.contents:
            return None
        return info, self.contents[path]

    def get_resource_info(self, path: str) -> ResourceInfo | None:
        return self.tor.get(path)

    def get_resource(self, path: str) -> tuple[ResourceInfo, bytes] | None:
        """Return the resource info and its bytes, or None unless both exist."""
        info = self.tor.get(path)
        if info is None or path not in self.resources:
            return None
        return info, self.resources[path]

    def get_style_info(self, path: str) -> StyleInfo | None:
        return self.tos.get(path)

    def get_style(self, path: str) -> tuple[StyleInfo, str] | None:
        """Return the style info and its CSS, or None unless both exist."""
        info = self.tos.get(path)
        if info is None or path not in self.styles:
            return None
        return info, self.styles[path]
