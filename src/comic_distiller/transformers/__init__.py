"""Transformers for decoding and normalizing page images."""

from .decoder import ImageDecoder, ImageFormat
from .page_renderer import PageRenderer

__all__ = [
    "ImageDecoder",
    "ImageFormat",
    "PageRenderer",
]
