"""Reader for comic-book archives.

CBZ files are plain zip archives; every non-directory entry is handed to
the page pipeline, which decides from the bytes whether it is an image.
"""

import logging
import zipfile
import zlib
from pathlib import Path
from typing import NamedTuple

from comic_distiller.exceptions import ArchiveOpenError

logger = logging.getLogger(__name__)

ENTRY_READ_ERRORS = (zipfile.BadZipFile, zlib.error, NotImplementedError, RuntimeError, OSError)


class ArchiveEntry(NamedTuple):
    """A file inside a source archive.

    Attributes:
        name: Entry path inside the archive
        data: Raw entry bytes
    """

    name: str
    data: bytes


class ArchiveReader:
    """Read every file entry of a zip archive into memory."""

    def read(self, path: Path) -> list[ArchiveEntry]:
        """Read all non-directory entries in archive order.

        Entries that cannot be decompressed (bad CRC, unsupported
        compression, encryption) are logged and skipped.

        Args:
            path: Path to the .cbz archive

        Returns:
            List of entries in the order they appear in the archive

        Raises:
            ArchiveOpenError: If the archive is missing or not a valid zip
        """
        try:
            archive = zipfile.ZipFile(path)
        except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError) as e:
            raise ArchiveOpenError(f"Failed to open archive {path}: {e}", path=str(path)) from e

        entries: list[ArchiveEntry] = []
        with archive:
            for info in archive.infolist():
                if info.is_dir():
                    continue
                try:
                    data = archive.read(info)
                except ENTRY_READ_ERRORS as e:
                    logger.warning(f"Failed to read {info.filename} in {path}: {e}")
                    continue
                entries.append(ArchiveEntry(info.filename, data))

        logger.debug(f"Read {len(entries)} entries from {path}")
        return entries
