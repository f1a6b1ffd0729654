"""Schema definitions for Comic Distiller."""

from .conversion import ConversionResult
from .manifest import ManifestItem, page_base
from .page import Page, SourceDocument
from .settings import RenderSettings

__all__ = [
    "ConversionResult",
    "ManifestItem",
    "Page",
    "RenderSettings",
    "SourceDocument",
    "page_base",
]
