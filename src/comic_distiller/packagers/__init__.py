"""Packagers for writing converted documents."""

from .directory_packager import DirectoryPackager
from .epub_packager import EPUBPackager
from .packager import Packager

__all__ = ["DirectoryPackager", "EPUBPackager", "Packager"]
