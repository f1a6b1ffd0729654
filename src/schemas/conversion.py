"""Conversion result schema.

A ConversionResult is returned for every archive handed to the
orchestrator, whether or not its output could be written.
"""

from typing import Literal

from pydantic import BaseModel


class ConversionResult(BaseModel):
    """Outcome of converting one archive.

    Attributes:
        id: Archive title (base name without extension)
        source_path: Path of the source archive
        output_path: Path of the written EPUB or directory, if any
        mode: "epub" for a packaged document, "directory" for extraction
        entry_count: Number of non-directory entries in the archive
        page_count: Number of pages written to the output
        status: "building" while converting, "sealed" on success,
                "failed" when the archive could not be converted
        validation_errors: Dropped entries and fatal errors
    """

    id: str
    source_path: str
    output_path: str | None = None
    mode: Literal["epub", "directory"] = "epub"
    entry_count: int = 0
    page_count: int = 0
    status: Literal["building", "sealed", "failed"] = "building"
    validation_errors: list[str] = []

    @property
    def succeeded(self) -> bool:
        return self.status == "sealed"
