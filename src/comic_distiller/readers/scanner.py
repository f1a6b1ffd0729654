"""Discovery of comic-book archives on disk."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIX = ".cbz"


def find_archives(
    root: Path,
    recursive: bool = False,
    exclude: Path | None = None,
) -> list[Path]:
    """Find .cbz archives under a directory.

    Args:
        root: Directory to scan
        recursive: Descend into subdirectories
        exclude: Directory that is never scanned (usually the output directory)

    Returns:
        Archive paths, directory by directory, sorted by name within each
    """
    excluded = exclude.resolve() if exclude is not None else None
    archives: list[Path] = []

    for path in sorted(root.iterdir(), key=lambda p: p.name):
        if path.is_dir():
            if not recursive:
                continue
            if excluded is not None and path.resolve() == excluded:
                logger.debug(f"Skipping output directory {path}")
                continue
            archives.extend(find_archives(path, recursive=True, exclude=exclude))
        elif path.suffix.lower() == ARCHIVE_SUFFIX:
            archives.append(path)

    return archives
