"""Base class for document packagers."""

from abc import ABC, abstractmethod
from pathlib import Path

from schemas.manifest import ManifestItem
from schemas.page import SourceDocument


class Packager(ABC):
    """Abstract base class for packagers.

    Packagers write the ordered pages of a SourceDocument to their final
    on-disk form.
    """

    mode: str = ""

    @abstractmethod
    def package(self, document: SourceDocument, destination: Path) -> Path:
        """Write a document's pages.

        Args:
            document: Source document with pages in final order
            destination: Output path without extension

        Returns:
            Path of the written output
        """
        pass

    def manifest_items(self, document: SourceDocument) -> list[ManifestItem]:
        """Project the document's pages onto 1-based manifest items."""
        return [
            ManifestItem.for_position(position, page.media_type)
            for position, page in enumerate(document.pages, start=1)
        ]
