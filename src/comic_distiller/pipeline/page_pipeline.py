"""Concurrent decode/render stage for a single archive.

Entries are processed on a bounded thread pool. Each worker writes only
its own slot of a results list sized to the entry count, and the final
page order is derived from page names once every worker has finished,
so completion order never affects the output.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import PurePosixPath

from comic_distiller.exceptions import EntryError, UnsupportedFormatError
from comic_distiller.readers.archive_reader import ArchiveEntry
from comic_distiller.transformers.decoder import ImageDecoder
from comic_distiller.transformers.page_renderer import PageRenderer
from schemas.page import Page, SourceDocument

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Pages and per-entry errors produced for one archive.

    Attributes:
        document: Source document with pages in final order
        entry_count: Number of entries submitted to the pipeline
        errors: One message per dropped entry, in archive order
    """

    document: SourceDocument
    entry_count: int = 0
    errors: list[str] = field(default_factory=list)


def page_name(entry_name: str, extension: str) -> str:
    """Derive a page display name from an archive entry name.

    Examples:
        >>> page_name("chapter1/01.png", ".jpeg")
        '01.jpeg'
    """
    return PurePosixPath(entry_name).stem + extension


class PagePipeline:
    """Decode and render every archive entry into pages.

    Attributes:
        decoder: ImageDecoder used for every entry
        renderer: PageRenderer used for every decoded image
        workers: Thread pool size
    """

    def __init__(
        self,
        decoder: ImageDecoder | None = None,
        renderer: PageRenderer | None = None,
        workers: int | None = None,
    ) -> None:
        self.decoder = decoder or ImageDecoder()
        self.renderer = renderer or PageRenderer()
        self.workers = workers or os.cpu_count() or 1

    def run(self, name: str, entries: list[ArchiveEntry]) -> PipelineResult:
        """Process all entries and return the pages in final order.

        Args:
            name: Source archive path, used as the document name and in logs
            entries: Archive entries in archive order

        Returns:
            PipelineResult whose document holds the successfully rendered
            pages sorted by name (ties keep archive order)
        """
        slots: list[Page | None] = [None] * len(entries)
        failures: list[str | None] = [None] * len(entries)

        def process(index: int) -> None:
            entry = entries[index]
            try:
                slots[index] = self._render_entry(entry)
            except UnsupportedFormatError as e:
                logger.debug(f"{name}: skipping {entry.name}: {e.message}")
                failures[index] = f"{entry.name}: {e.message}"
            except EntryError as e:
                logger.warning(f"{name}: dropping {entry.name}: {e.message}")
                failures[index] = f"{entry.name}: {e.message}"
            except Exception as e:
                logger.error(f"{name}: unexpected error processing {entry.name}: {e}")
                failures[index] = f"{entry.name}: {e}"

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            list(executor.map(process, range(len(entries))))

        pages = sorted(
            (page for page in slots if page is not None),
            key=lambda page: page.name,
        )
        errors = [message for message in failures if message is not None]

        logger.info(
            f"{name}: rendered {len(pages)} of {len(entries)} entries "
            f"with {self.workers} workers"
        )
        return PipelineResult(
            document=SourceDocument(name=name, pages=pages),
            entry_count=len(entries),
            errors=errors,
        )

    def _render_entry(self, entry: ArchiveEntry) -> Page:
        """Decode and render a single entry."""
        image = self.decoder.decode(entry.data, entry_name=entry.name)
        try:
            data = self.renderer.render(image)
        except EntryError as e:
            e.entry_name = entry.name
            raise
        finally:
            image.close()
        return Page(
            name=page_name(entry.name, self.renderer.extension),
            data=data,
            media_type=self.renderer.media_type,
        )
