"""Built-in fallback payloads shipped with the package."""

from functools import lru_cache
from importlib import resources

NO_SECTION_PATH = "default/no_section.html"
NO_COVER_PATH = "default/no_cover.jpg"


@lru_cache(maxsize=None)
def no_section() -> str:
    """Fallback section shown when a document has no content."""
    return (
        resources.files("fobz")
        .joinpath(NO_SECTION_PATH)
        .read_text(encoding="utf-8")
    )


@lru_cache(maxsize=None)
def no_cover() -> bytes:
    """Fallback cover image."""
    return resources.files("fobz").joinpath(NO_COVER_PATH).read_bytes()
