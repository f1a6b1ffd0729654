"""Directory packager for extraction mode.

Writes each rendered page as ``page001.jpeg``, ``page002.jpeg``, ... into a
plain directory, without any markup or manifest.
"""

import logging
from pathlib import Path

from comic_distiller.exceptions import DirectoryCreateError, WriteError
from schemas.page import SourceDocument

from .packager import Packager

logger = logging.getLogger(__name__)


class DirectoryPackager(Packager):
    """Write a SourceDocument's pages into a directory."""

    mode = "directory"

    def package(self, document: SourceDocument, destination: Path) -> Path:
        """Write every page image into ``destination``.

        Args:
            document: Source document with pages in final order
            destination: Directory to create (parents included)

        Returns:
            The destination directory

        Raises:
            DirectoryCreateError: If the directory cannot be created
            WriteError: If a page image cannot be written
        """
        try:
            destination.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreateError(f"Failed to create {destination}: {e}") from e

        for item, page in zip(self.manifest_items(document), document.pages):
            image_path = destination / f"{item.base}.{item.extension}"
            try:
                image_path.write_bytes(page.data)
            except OSError as e:
                raise WriteError(f"Failed to write {image_path}: {e}") from e
            logger.debug(f"Wrote {page.name} as {image_path.name}")

        logger.info(f"Extracted {len(document.pages)} pages to {destination}")
        return destination
