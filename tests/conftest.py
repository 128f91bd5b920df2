"""Shared fixtures for archive tests."""

import json
import zipfile
from pathlib import Path

import pytest

from fobz import FobzDocument

_MANIFEST = {
    "version": "1.0",
    "title": "Sample Document",
    "author": "John Doe",
    "description": "A short description of the document.",
    "tags": ["fiction", "adventure"],
    "index": "contents/introduction.html",
    "cover": "resources/cover.png",
}

_PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR" + bytes(range(32))
_JPG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + bytes(range(200, 256))


@pytest.fixture
def manifest_data() -> dict:
    """Contents of manifest.json in hand-built archives."""
    return dict(_MANIFEST)


@pytest.fixture
def png_bytes() -> bytes:
    return _PNG_BYTES


@pytest.fixture
def jpg_bytes() -> bytes:
    return _JPG_BYTES


@pytest.fixture
def metadata_entries():
    """Build valid metadata entries for a hand-built archive."""

    def _entries(**overrides) -> dict[str, str]:
        entries = {
            "manifest.json": json.dumps(_MANIFEST),
            "toc.json": json.dumps({"contents": []}),
            "tor.json": json.dumps({"resources": []}),
            "tos.json": json.dumps({"styles": []}),
        }
        entries.update(overrides)
        return entries

    return _entries


@pytest.fixture
def write_raw_archive(tmp_path: Path):
    """Write a ZIP archive with exactly the given entries."""

    def _write(entries: dict[str, str | bytes], name: str = "raw.fobz") -> Path:
        path = tmp_path / name
        with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for entry_name, data in entries.items():
                archive.writestr(entry_name, data)
        return path

    return _write


@pytest.fixture
def document() -> FobzDocument:
    """Document with two sections, two images and a stylesheet."""
    doc = FobzDocument(
        "Sample Document",
        "John Doe",
        "A short description of the document.",
        ["fiction", "adventure"],
    )
    doc.add_content(
        "contents/introduction.html", "Introduction", "<h1>Introduction</h1>"
    )
    doc.add_content("contents/chapter1.html", "Chapter 1", "<p>Ünïcödé text</p>")
    doc.add_resource("resources/cover.png", "Cover Image", _PNG_BYTES)
    doc.add_resource("resources/cat.jpg", "Cat Image", _JPG_BYTES)
    doc.add_style("styles/main.css", "body { margin: 0; }")
    return doc
