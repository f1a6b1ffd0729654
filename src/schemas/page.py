"""Page domain objects."""

from dataclasses import dataclass, field
from pathlib import PurePath


@dataclass(frozen=True)
class Page:
    """A rendered page ready to be packaged.

    Attributes:
        name: Display name derived from the archive entry's base name
        data: Encoded bytes of the rendered page
        media_type: MIME type of ``data``
    """

    name: str
    data: bytes = field(repr=False)
    media_type: str


@dataclass
class SourceDocument:
    """An archive's pages in final reading order.

    Attributes:
        name: Path of the source archive
        pages: Rendered pages, sorted by name
    """

    name: str
    pages: list[Page] = field(default_factory=list)

    @property
    def title(self) -> str:
        """Archive base name without its extension."""
        return PurePath(self.name).stem

    def __len__(self) -> int:
        return len(self.pages)
