"""Conversion orchestrator for one or many archives.

Wires the archive reader, page pipeline and packager together. Every
archive gets a fresh pipeline, and a failure in one archive is recorded
on its ConversionResult without stopping the rest of a batch.
"""

import logging
from pathlib import Path

from comic_distiller.exceptions import DirectoryCreateError, DistillerError
from comic_distiller.packagers import DirectoryPackager, EPUBPackager, Packager
from comic_distiller.pipeline.page_pipeline import PagePipeline
from comic_distiller.readers.archive_reader import ArchiveReader
from comic_distiller.transformers.page_renderer import PageRenderer
from schemas.conversion import ConversionResult
from schemas.settings import RenderSettings

logger = logging.getLogger(__name__)


class Orchestrator:
    """End-to-end archive converter.

    Attributes:
        output_dir: Base directory where documents are written
        settings: Canvas, quality, mode and worker settings
        reader: ArchiveReader used to open archives
        packager: Packager used to write output (EPUB unless extracting)
    """

    def __init__(
        self,
        output_dir: Path,
        settings: RenderSettings | None = None,
        reader: ArchiveReader | None = None,
        packager: Packager | None = None,
    ):
        self.output_dir = output_dir
        self.settings = settings or RenderSettings()
        self.reader = reader or ArchiveReader()
        self.packager = packager or self._default_packager()

    def _default_packager(self) -> Packager:
        if self.settings.extract:
            return DirectoryPackager()
        return EPUBPackager(width=self.settings.width, height=self.settings.height)

    def new_pipeline(self) -> PagePipeline:
        """Create the page pipeline for a single archive."""
        renderer = PageRenderer(
            width=self.settings.width,
            height=self.settings.height,
            quality=self.settings.quality,
        )
        return PagePipeline(renderer=renderer, workers=self.settings.workers)

    def convert(self, archive_path: Path, destination: Path | None = None) -> ConversionResult:
        """Convert a single archive.

        Args:
            archive_path: Path to the .cbz archive
            destination: Output path without extension
                         (default: output_dir / <archive name>)

        Returns:
            ConversionResult with status "sealed" on success or "failed"
        """
        destination = destination or self.output_dir / archive_path.stem
        result = ConversionResult(
            id=archive_path.stem,
            source_path=str(archive_path),
            mode=self.packager.mode,
        )
        logger.info(f"Converting: {archive_path}")

        try:
            entries = self.reader.read(archive_path)
        except DistillerError as e:
            return self._fail(result, f"Failed to parse archive '{archive_path}': {e.message}")

        pipeline_result = self.new_pipeline().run(str(archive_path), entries)
        result.entry_count = pipeline_result.entry_count
        result.validation_errors.extend(pipeline_result.errors)

        document = pipeline_result.document
        if not document.pages:
            return self._fail(result, f"No pages could be rendered from '{archive_path}'")

        try:
            self._ensure_parent(destination)
            output_path = self.packager.package(document, destination)
        except DistillerError as e:
            return self._fail(
                result,
                f"Failed to create {self.packager.mode} '{destination}': {e.message}",
            )

        result.output_path = str(output_path)
        result.page_count = len(document.pages)
        result.status = "sealed"
        logger.info(f"Sealed {output_path} ({result.page_count} pages)")
        return result

    def convert_all(
        self,
        archive_paths: list[Path],
        root: Path | None = None,
    ) -> list[ConversionResult]:
        """Convert every archive, continuing past failures.

        Args:
            archive_paths: Archives to convert, in order
            root: Directory the archives were found in; subdirectories below
                  it are recreated under output_dir

        Returns:
            One ConversionResult per archive, in input order
        """
        results: list[ConversionResult] = []
        for archive_path in archive_paths:
            destination = self._destination_for(archive_path, root)
            try:
                results.append(self.convert(archive_path, destination))
            except Exception as e:
                logger.error(f"Unexpected error converting {archive_path}: {e}")
                result = ConversionResult(
                    id=archive_path.stem,
                    source_path=str(archive_path),
                    mode=self.packager.mode,
                )
                results.append(self._fail(result, f"Unexpected error: {e}"))

        sealed = sum(1 for r in results if r.succeeded)
        logger.info(f"Converted {sealed} of {len(results)} archives")
        return results

    def _destination_for(self, archive_path: Path, root: Path | None) -> Path:
        """Output path (without extension) mirroring the archive's nesting."""
        if root is None:
            return self.output_dir / archive_path.stem
        try:
            nest = archive_path.parent.relative_to(root)
        except ValueError:
            return self.output_dir / archive_path.stem
        return self.output_dir / nest / archive_path.stem

    def _ensure_parent(self, destination: Path) -> None:
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreateError(
                f"Cannot create output directory {destination.parent}: {e}"
            ) from e

    def _fail(self, result: ConversionResult, message: str) -> ConversionResult:
        logger.error(message)
        result.validation_errors.append(message)
        result.status = "failed"
        return result
