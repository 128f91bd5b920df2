"""Tests for FobzDocument mutation and queries."""

import logging

import pytest

from fobz import AddOutcome, FobzDocument
from fobz.defaults import no_cover, no_section


class TestNewDocument:
    """Tests for a freshly constructed document."""

    def test_manifest(self):
        doc = FobzDocument("Title", "Author", "Description", ["tag"])
        manifest = doc.get_manifest()
        assert manifest.title == "Title"
        assert manifest.author == "Author"
        assert manifest.description == "Description"
        assert manifest.tags == ["tag"]
        assert manifest.version == "1.0"

    def test_sentinels(self):
        doc = FobzDocument()
        assert doc.contents == {"default/no_section.html": no_section()}
        assert doc.resources == {"default/no_cover.jpg": no_cover()}
        assert doc.styles == {}

    def test_sentinel_payloads_are_not_empty(self):
        assert "<html" in no_section()
        assert no_cover().startswith(b"\xff\xd8")

    def test_tables_are_empty(self):
        doc = FobzDocument()
        assert len(doc.toc) == 0
        assert len(doc.tor) == 0
        assert len(doc.tos) == 0

    def test_documents_do_not_share_payloads(self):
        a = FobzDocument()
        b = FobzDocument()
        a.remove_content("default/no_section.html")
        assert "default/no_section.html" in b.contents


class TestContent:
    """Tests for adding, removing and reading sections."""

    def test_add_and_get(self):
        doc = FobzDocument()
        outcome = doc.add_content("contents/a.html", "A", "<p>a</p>")

        assert outcome is AddOutcome.ADDED
        info, content = doc.get_content("contents/a.html")
        assert info.title == "A"
        assert content == "<p>a</p>"
        assert doc.get_content_info("contents/a.html") == info

    @pytest.mark.parametrize(
        "path", ["x.txt", "contents/a.htm", "contents/a.xhtml", "contents/a.HTML"]
    )
    def test_wrong_extension_is_rejected(self, path):
        doc = FobzDocument()
        outcome = doc.add_content(path, "T", "body")

        assert outcome is AddOutcome.REJECTED
        assert path not in doc.contents
        assert doc.get_content_info(path) is None
        assert len(doc.toc) == 0

    def test_re_adding_replaces(self):
        doc = FobzDocument()
        doc.add_content("contents/a.html", "A", "old")
        outcome = doc.add_content("contents/a.html", "A2", "new")

        assert outcome is AddOutcome.REPLACED
        assert len(doc.toc) == 1
        info, content = doc.get_content("contents/a.html")
        assert info.title == "A2"
        assert content == "new"

    def test_remove(self):
        doc = FobzDocument()
        doc.add_content("contents/a.html", "A", "<p>a</p>")
        doc.remove_content("contents/a.html")

        assert "contents/a.html" not in doc.contents
        assert doc.get_content_info("contents/a.html") is None
        assert doc.get_content("contents/a.html") is None

    def test_remove_missing_path(self):
        doc = FobzDocument()
        doc.add_content("contents/a.html", "A", "<p>a</p>")
        doc.remove_content("contents/missing.html")

        assert set(doc.contents) == {"default/no_section.html", "contents/a.html"}
        assert doc.toc.paths() == ["contents/a.html"]

    def test_get_content_requires_payload(self):
        doc = FobzDocument()
        doc.add_content("contents/a.html", "A", "<p>a</p>")
        del doc.contents["contents/a.html"]

        assert doc.get_content_info("contents/a.html") is not None
        assert doc.get_content("contents/a.html") is None

    def test_get_content_requires_table_entry(self):
        doc = FobzDocument()
        assert doc.get_content("default/no_section.html") is None

    def test_path_outside_contents_warns(self, caplog):
        doc = FobzDocument()
        with caplog.at_level(logging.WARNING):
            outcome = doc.add_content("chapter.html", "Chapter", "<p></p>")

        assert outcome is AddOutcome.ADDED
        assert "chapter.html" in doc.contents
        assert "will not be loaded back" in caplog.text


class TestResource:
    """Tests for adding, removing and reading resources."""

    @pytest.mark.parametrize("path", ["resources/a.jpg", "resources/a.png"])
    def test_add_and_get(self, path):
        doc = FobzDocument()
        assert doc.add_resource(path, "Image", b"\x00\x01") is AddOutcome.ADDED

        info, data = doc.get_resource(path)
        assert info.name == "Image"
        assert data == b"\x00\x01"

    @pytest.mark.parametrize(
        "path", ["resources/a.gif", "resources/a.jpeg", "resources/a.mp4", "a.png.txt"]
    )
    def test_wrong_extension_is_rejected(self, path):
        doc = FobzDocument()
        assert doc.add_resource(path, "Image", b"\x00") is AddOutcome.REJECTED
        assert path not in doc.resources
        assert len(doc.tor) == 0

    def test_accepts_bytearray(self):
        doc = FobzDocument()
        doc.add_resource("resources/a.png", "A", bytearray(b"\x01\x02"))
        assert doc.resources["resources/a.png"] == b"\x01\x02"
        assert isinstance(doc.resources["resources/a.png"], bytes)

    def test_remove(self):
        doc = FobzDocument()
        doc.add_resource("resources/a.png", "A", b"\x00")
        doc.remove_resource("resources/a.png")
        assert doc.get_resource_info("resources/a.png") is None
        assert "resources/a.png" not in doc.resources

    def test_remove_missing_path(self):
        doc = FobzDocument()
        doc.remove_resource("resources/missing.png")
        assert set(doc.resources) == {"default/no_cover.jpg"}

    def test_get_resource_requires_payload(self):
        doc = FobzDocument()
        doc.add_resource("resources/a.png", "A", b"\x00")
        doc.resources.pop("resources/a.png")
        assert doc.get_resource("resources/a.png") is None


class TestStyle:
    """Tests for adding, removing and reading stylesheets."""

    def test_add_and_get(self):
        doc = FobzDocument()
        assert doc.add_style("styles/main.css", "body {}") is AddOutcome.ADDED

        info, css = doc.get_style("styles/main.css")
        assert info.path == "styles/main.css"
        assert css == "body {}"
        assert doc.get_style_info("styles/main.css") == info

    def test_wrong_extension_is_rejected(self):
        doc = FobzDocument()
        assert doc.add_style("styles/main.scss", "body {}") is AddOutcome.REJECTED
        assert doc.styles == {}
        assert len(doc.tos) == 0

    def test_re_adding_replaces(self):
        doc = FobzDocument()
        doc.add_style("styles/main.css", "a {}")
        assert doc.add_style("styles/main.css", "b {}") is AddOutcome.REPLACED
        assert len(doc.tos) == 1
        assert doc.styles["styles/main.css"] == "b {}"

    def test_remove(self):
        doc = FobzDocument()
        doc.add_style("styles/main.css", "body {}")
        doc.remove_style("styles/main.css")
        doc.remove_style("styles/main.css")
        assert doc.get_style("styles/main.css") is None
        assert doc.styles == {}
