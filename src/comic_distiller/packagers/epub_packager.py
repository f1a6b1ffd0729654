"""EPUB packager for rendered comic pages.

Writes an EPUB 2 container whose entries appear in this order:

    mimetype                      (stored, never compressed)
    OEBPS/pages/page001.xhtml
    OEBPS/images/page001.jpeg
    ...                           (markup then image, for every page)
    OEBPS/content.opf             (manifest and spine)
    OEBPS/toc.ncx                 (navigation map)
    META-INF/container.xml        (points at OEBPS/content.opf)

Metadata documents are rendered from Jinja2 templates and checked for
well-formedness with lxml before they are written.
"""

import logging
import zipfile
from datetime import date
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateError
from lxml import etree

from comic_distiller.exceptions import PackagingError
from comic_distiller.identifiers import generate_identifier
from schemas.manifest import ManifestItem
from schemas.page import SourceDocument

from .filters import FILTERS, image_href, page_href
from .packager import Packager

logger = logging.getLogger(__name__)

# Resolve the package root (2 levels up from this file):
#   epub_packager.py → packagers/ → comic_distiller/
PACKAGE_ROOT = Path(__file__).parent.parent
TEMPLATES_DIR = PACKAGE_ROOT / "resources" / "templates"

MIMETYPE = "application/epub+zip"
EPUB_SUFFIX = ".epub"
MANIFEST_PATH = "OEBPS/content.opf"

METADATA_DOCUMENTS = [
    (MANIFEST_PATH, "content.opf.j2"),
    ("OEBPS/toc.ncx", "toc.ncx.j2"),
    ("META-INF/container.xml", "container.xml.j2"),
]


class EPUBPackager(Packager):
    """Package a SourceDocument as an EPUB file.

    Attributes:
        templates_dir: Directory containing the Jinja2 templates
        language: dc:language written to the manifest
        width: Canvas width recorded as the original resolution (optional)
        height: Canvas height recorded as the original resolution (optional)
    """

    mode = "epub"

    def __init__(
        self,
        templates_dir: Path | None = None,
        language: str = "en",
        width: int | None = None,
        height: int | None = None,
    ):
        self.templates_dir = templates_dir or TEMPLATES_DIR
        self.language = language
        self.width = width
        self.height = height

        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
        )
        for name, func in FILTERS.items():
            self._env.filters[name] = func

    def output_path(self, destination: Path) -> Path:
        """EPUB path for a destination given without extension."""
        return destination.with_name(destination.name + EPUB_SUFFIX)

    def package(
        self,
        document: SourceDocument,
        destination: Path,
        title: str | None = None,
        issued: date | None = None,
        identifier: str | None = None,
    ) -> Path:
        """Write the document as ``<destination>.epub``.

        Args:
            document: Source document with pages in final order
            destination: Output path without extension
            title: Document title (default: archive base name)
            issued: Document date (default: today)
            identifier: Unique identifier (default: freshly generated)

        Returns:
            Path of the written EPUB file

        Raises:
            PackagingError: If the file cannot be created or any entry cannot
                be rendered or written; a partially written file is removed
        """
        epub_path = self.output_path(destination)
        items = self.manifest_items(document)
        context = {
            "title": title if title is not None else document.title,
            "date": (issued or date.today()).isoformat(),
            "identifier": identifier or generate_identifier(),
            "language": self.language,
            "items": items,
            "manifest_path": MANIFEST_PATH,
            "width": self.width,
            "height": self.height,
            "resolution": self._resolution(),
        }

        try:
            archive = zipfile.ZipFile(epub_path, "w", compression=zipfile.ZIP_DEFLATED)
        except OSError as e:
            raise PackagingError(f"Cannot create {epub_path}: {e}") from e

        try:
            with archive:
                self._write(archive, document, items, context)
        except PackagingError:
            self._discard(epub_path)
            raise
        except OSError as e:
            self._discard(epub_path)
            raise PackagingError(f"Failed to write {epub_path}: {e}") from e

        logger.info(f"Wrote EPUB {epub_path} with {len(items)} pages")
        return epub_path

    def _write(
        self,
        archive: zipfile.ZipFile,
        document: SourceDocument,
        items: list[ManifestItem],
        context: dict,
    ) -> None:
        """Write every container entry in order."""
        archive.writestr("mimetype", MIMETYPE, compress_type=zipfile.ZIP_STORED)

        for item, page in zip(items, document.pages):
            archive.writestr(
                f"OEBPS/{page_href(item)}",
                self._render("page.xhtml.j2", item=item, **context),
            )
            archive.writestr(f"OEBPS/{image_href(item)}", page.data)

        for entry_path, template_name in METADATA_DOCUMENTS:
            archive.writestr(entry_path, self._render(template_name, **context))

    def _discard(self, epub_path: Path) -> None:
        """Remove a partially written EPUB, logging if it cannot be removed."""
        try:
            epub_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove partial EPUB {epub_path}: {e}")

    def _render(self, template_name: str, **context) -> str:
        """Render a template and verify the result is well-formed XML.

        Raises:
            PackagingError: If the template fails or produces invalid XML
        """
        try:
            rendered = self._env.get_template(template_name).render(**context)
            etree.fromstring(rendered.encode("utf-8"))
        except TemplateError as e:
            raise PackagingError(f"Cannot render template {template_name}: {e}") from e
        except etree.XMLSyntaxError as e:
            raise PackagingError(f"Template {template_name} produced invalid XML: {e}") from e
        return rendered

    def _resolution(self) -> str | None:
        if self.width and self.height:
            return f"{self.width}x{self.height}"
        return None
