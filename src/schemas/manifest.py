"""Manifest item schema used when rendering EPUB metadata templates."""

from pydantic import BaseModel, Field

MEDIA_EXTENSIONS = {
    "image/jpeg": "jpeg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}


class ManifestItem(BaseModel):
    """A page as it appears in the package manifest.

    Attributes:
        id: 1-based position of the page in the document
        base: File base name shared by the page markup and image (``page001``)
        media_type: MIME type of the page image
    """

    id: int = Field(ge=1)
    base: str
    media_type: str

    model_config = {"frozen": True}

    @property
    def extension(self) -> str:
        return MEDIA_EXTENSIONS.get(self.media_type, "bin")

    @classmethod
    def for_position(cls, position: int, media_type: str) -> "ManifestItem":
        """Build the item for the page at 1-based ``position``."""
        return cls(id=position, base=page_base(position), media_type=media_type)


def page_base(position: int) -> str:
    """Zero-padded base name for the page at 1-based ``position``.

    Examples:
        >>> page_base(7)
        'page007'
    """
    return f"page{position:03d}"
