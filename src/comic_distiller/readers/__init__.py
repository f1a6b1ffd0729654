"""Readers for locating and opening source archives."""

from .archive_reader import ArchiveEntry, ArchiveReader
from .scanner import find_archives

__all__ = ["ArchiveEntry", "ArchiveReader", "find_archives"]
