"""Render settings shared by the pipeline, packagers and CLI."""

from pydantic import BaseModel, Field

MIN_DIMENSION = 128


class RenderSettings(BaseModel):
    """Validated conversion settings.

    Attributes:
        width: Output canvas width in pixels
        height: Output canvas height in pixels
        quality: JPEG quality (0-100)
        extract: Write a directory of images instead of an EPUB
        workers: Size of the decode/render thread pool (None uses the CPU count)
    """

    width: int = Field(default=600, ge=MIN_DIMENSION)
    height: int = Field(default=800, ge=MIN_DIMENSION)
    quality: int = Field(default=25, ge=0, le=100)
    extract: bool = False
    workers: int | None = Field(default=None, ge=1)

    model_config = {"frozen": True}
