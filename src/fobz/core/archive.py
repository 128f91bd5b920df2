"""Reading and writing the .fobz ZIP layout.

Layout of an archive:

    manifest.json        document metadata
    toc.json             {"contents": [...]}
    tor.json             {"resources": [...]}
    tos.json             {"styles": [...]}
    contents/            HTML sections (UTF-8)
    resources/           JPEG/PNG images
    styles/              CSS stylesheets (UTF-8)
    default/             built-in fallback section and cover

On read, every entry besides the four metadata files is routed into one of the
three payload maps by `classify_entry`. Anything it does not recognize is
skipped.
"""

import logging
import zipfile
import zlib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, TypeVar

from pydantic import ValidationError

from fobz.errors import ArchiveIOError, FormatError
from fobz.models.manifest import Manifest
from fobz.models.tables import TableOfContents, TableOfResources, TableOfStyles

log = logging.getLogger(__name__)

MANIFEST_ENTRY = "manifest.json"
TOC_ENTRY = "toc.json"
TOR_ENTRY = "tor.json"
TOS_ENTRY = "tos.json"
METADATA_ENTRIES = (MANIFEST_ENTRY, TOC_ENTRY, TOR_ENTRY, TOS_ENTRY)

CONTENTS_DIR = "contents/"
RESOURCES_DIR = "resources/"
STYLES_DIR = "styles/"
DEFAULT_DIR = "default/"
DIRECTORIES = (CONTENTS_DIR, RESOURCES_DIR, STYLES_DIR, DEFAULT_DIR)

CONTENT_EXTENSION = ".html"
XHTML_EXTENSION = ".xhtml"
RESOURCE_EXTENSIONS = (".jpg", ".png")
STYLE_EXTENSION = ".css"

COMPRESSION = zipfile.ZIP_DEFLATED

T = TypeVar("T")


class EntryKind(str, Enum):
    """Payload map an archive entry belongs to."""

    CONTENT = "content"
    RESOURCE = "resource"
    STYLE = "style"


def classify_entry(name: str) -> EntryKind | None:
    """Decide which payload map an archive entry is loaded into.

    - `.xhtml` anywhere, or `.html` under contents/ or default/: content
    - `.jpg`/`.png` under resources/ or default/: resource
    - `.css` under styles/: style

    Returns None for entries that are not loaded.
    """
    if name.endswith(XHTML_EXTENSION):
        return EntryKind.CONTENT
    if name.startswith((CONTENTS_DIR, DEFAULT_DIR)) and name.endswith(
        CONTENT_EXTENSION
    ):
        return EntryKind.CONTENT
    if name.startswith((RESOURCES_DIR, DEFAULT_DIR)) and name.endswith(
        RESOURCE_EXTENSIONS
    ):
        return EntryKind.RESOURCE
    if name.startswith(STYLES_DIR) and name.endswith(STYLE_EXTENSION):
        return EntryKind.STYLE
    return None


@dataclass
class ArchivePayload:
    """Everything stored in a .fobz archive."""

    manifest: Manifest
    toc: TableOfContents
    tor: TableOfResources
    tos: TableOfStyles
    contents: dict[str, str] = field(default_factory=dict)
    resources: dict[str, bytes] = field(default_factory=dict)
    styles: dict[str, str] = field(default_factory=dict)


def read_archive(path: Path) -> ArchivePayload:
    """Load a .fobz archive.

    Args:
        path: Path to the archive file

    Returns:
        Decoded metadata, tables and payload maps

    Raises:
        ArchiveIOError: If the file cannot be opened or read as a ZIP archive
        FormatError: If a metadata entry is missing or malformed, or a text
            payload is not valid UTF-8
    """
    try:
        archive = zipfile.ZipFile(path)
    except zipfile.BadZipFile as e:
        raise ArchiveIOError(path, f"not a ZIP archive: {e}") from e
    except OSError as e:
        raise ArchiveIOError(path, f"cannot open archive: {e}") from e

    with archive:
        payload = ArchivePayload(
            manifest=_read_metadata(
                archive, path, MANIFEST_ENTRY, Manifest.model_validate_json
            ),
            toc=_read_metadata(archive, path, TOC_ENTRY, TableOfContents.from_json),
            tor=_read_metadata(archive, path, TOR_ENTRY, TableOfResources.from_json),
            tos=_read_metadata(archive, path, TOS_ENTRY, TableOfStyles.from_json),
        )

        for info in archive.infolist():
            name = info.filename
            if info.is_dir() or name in METADATA_ENTRIES:
                continue

            kind = classify_entry(name)
            if kind is None:
                log.debug("Skipping unrecognized entry %s", name)
                continue

            data = _read_entry(archive, path, info)
            if kind is EntryKind.CONTENT:
                payload.contents[name] = _decode_text(path, name, data)
            elif kind is EntryKind.RESOURCE:
                payload.resources[name] = data
            else:
                payload.styles[name] = _decode_text(path, name, data)

    log.info(
        "Read %s: %d contents, %d resources, %d styles",
        path,
        len(payload.contents),
        len(payload.resources),
        len(payload.styles),
    )
    return payload


def write_archive(path: Path, payload: ArchivePayload) -> None:
    """Write a .fobz archive, replacing any existing file at `path`.

    Every entry is encoded before anything touches the disk. The archive is
    written next to `path` and moved into place once it is complete, so a
    failed write leaves any existing file untouched.

    Raises:
        FormatError: If an entry cannot be encoded (e.g. text that is not
            valid Unicode)
        ArchiveIOError: If the file cannot be created, written or finalized
    """
    entries = _encode_entries(path, payload)
    partial = path.with_name(f".{path.name}.partial")

    try:
        with zipfile.ZipFile(partial, "w", compression=COMPRESSION) as archive:
            for name, data in entries[: len(METADATA_ENTRIES)]:
                archive.writestr(name, data)

            for directory in DIRECTORIES:
                archive.writestr(_directory_info(directory), b"", COMPRESSION)

            # Payload order in the archive does not matter, tables hold the
            # display order.
            for name, data in entries[len(METADATA_ENTRIES) :]:
                archive.writestr(name, data)
        partial.replace(path)
    except OSError as e:
        partial.unlink(missing_ok=True)
        raise ArchiveIOError(path, f"cannot write archive: {e}") from e

    log.info(
        "Wrote %s: %d contents, %d resources, %d styles",
        path,
        len(payload.contents),
        len(payload.resources),
        len(payload.styles),
    )


def _encode_entries(path: Path, payload: ArchivePayload) -> list[tuple[str, bytes]]:
    """Encode all entries in archive order: metadata first, then payloads."""
    entries = []
    for name, render in (
        (MANIFEST_ENTRY, lambda: payload.manifest.model_dump_json(indent=2)),
        (TOC_ENTRY, payload.toc.to_json),
        (TOR_ENTRY, payload.tor.to_json),
        (TOS_ENTRY, payload.tos.to_json),
    ):
        try:
            text = render()
        except ValueError as e:
            raise FormatError(path, f"cannot serialize {name}: {e}") from e
        entries.append((name, _encode_text(path, name, text)))

    entries += [
        (name, _encode_text(path, name, content))
        for name, content in payload.contents.items()
    ]
    entries += [(name, bytes(data)) for name, data in payload.resources.items()]
    entries += [
        (name, _encode_text(path, name, style))
        for name, style in payload.styles.items()
    ]
    return entries


def _encode_text(path: Path, name: str, text: str) -> bytes:
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise FormatError(path, f"entry {name} cannot be encoded as UTF-8") from e


def _read_metadata(
    archive: zipfile.ZipFile,
    path: Path,
    name: str,
    decode: Callable[[bytes], T],
) -> T:
    """Read and decode one of the required JSON entries."""
    try:
        info = archive.getinfo(name)
    except KeyError as e:
        raise FormatError(path, f"missing required entry {name}") from e

    try:
        return decode(_read_entry(archive, path, info))
    except ValidationError as e:
        raise FormatError(path, f"invalid {name}: {e}") from e


def _read_entry(archive: zipfile.ZipFile, path: Path, info: zipfile.ZipInfo) -> bytes:
    try:
        return archive.read(info)
    except (zipfile.BadZipFile, zlib.error, OSError) as e:
        raise ArchiveIOError(path, f"cannot read entry {info.filename}: {e}") from e


def _decode_text(path: Path, name: str, data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FormatError(path, f"entry {name} is not valid UTF-8") from e


def _directory_info(name: str) -> zipfile.ZipInfo:
    """Build the ZipInfo for an empty directory marker."""
    info = zipfile.ZipInfo(name)
    info.external_attr = (0o40755 << 16) | 0x10  # drwxr-xr-x, MS-DOS directory flag
    return info
