"""Document-level metadata stored in manifest.json."""

from pydantic import BaseModel, ConfigDict

from fobz.defaults import NO_COVER_PATH, NO_SECTION_PATH

FORMAT_VERSION = "1.0"


class Manifest(BaseModel):
    """Metadata of a .fobz document.

    All fields are required when decoding manifest.json. Use `Manifest.create`
    to build a manifest with the format defaults for a new document.
    """

    model_config = ConfigDict(validate_assignment=True)

    version: str
    title: str
    author: str
    description: str
    tags: list[str]
    index: str  # path of the starting content entry
    cover: str  # path of the cover resource entry

    @classmethod
    def create(
        cls,
        title: str = "",
        author: str = "",
        description: str = "",
        tags: list[str] | None = None,
    ) -> "Manifest":
        """Create a manifest pointing at the built-in default section and cover."""
        return cls(
            version=FORMAT_VERSION,
            title=title,
            author=author,
            description=description,
            tags=list(tags or []),
            index=NO_SECTION_PATH,
            cover=NO_COVER_PATH,
        )

    def add_tags(self, tags: list[str]) -> None:
        """Append tags in order. Duplicates are kept."""
        self.tags = self.tags + list(tags)

    def remove_tags(self, tags: list[str]) -> None:
        """Remove every occurrence of the given tags."""
        self.tags = [tag for tag in self.tags if tag not in tags]
