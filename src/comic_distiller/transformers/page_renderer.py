"""Page normalization onto a fixed canvas.

Every page is scaled to fit the target canvas without changing its aspect
ratio, centered on an opaque white background and re-encoded as JPEG, so
the output document is uniform regardless of the source formats.
"""

import logging
import math
from io import BytesIO

from PIL import Image

from comic_distiller.exceptions import EncodeError

logger = logging.getLogger(__name__)

BACKGROUND = (255, 255, 255)
OUTPUT_MEDIA_TYPE = "image/jpeg"
OUTPUT_EXTENSION = ".jpeg"
ALPHA_MODES = {"RGBA", "LA", "PA", "RGBa", "La"}


class PageRenderer:
    """Fit images onto a fixed canvas and encode them as JPEG.

    Attributes:
        width: Canvas width in pixels
        height: Canvas height in pixels
        quality: JPEG quality (0-100)
        resample: Pillow resampling filter used for scaling
    """

    media_type = OUTPUT_MEDIA_TYPE
    extension = OUTPUT_EXTENSION

    def __init__(
        self,
        width: int = 600,
        height: int = 800,
        quality: int = 25,
        resample: Image.Resampling = Image.Resampling.BICUBIC,
    ) -> None:
        self.width = width
        self.height = height
        self.quality = quality
        self.resample = resample

    def layout(self, source_size: tuple[int, int]) -> tuple[tuple[int, int], tuple[int, int]]:
        """Compute the scaled size and canvas offset for a source image.

        Args:
            source_size: (width, height) of the source image

        Returns:
            ((scaled_width, scaled_height), (offset_x, offset_y))

        Examples:
            >>> PageRenderer(600, 800).layout((100, 200))
            ((400, 800), (100, 0))
        """
        source_width, source_height = source_size
        ratio = min(self.width / source_width, self.height / source_height)
        scaled = (math.floor(source_width * ratio), math.floor(source_height * ratio))
        offset = ((self.width - scaled[0]) // 2, (self.height - scaled[1]) // 2)
        return scaled, offset

    def compose(self, image: Image.Image) -> Image.Image:
        """Draw ``image`` letterboxed onto a white canvas.

        Args:
            image: Decoded source image

        Returns:
            RGB canvas of exactly width x height

        Raises:
            EncodeError: If the image cannot be converted or resampled
        """
        canvas = Image.new("RGB", (self.width, self.height), BACKGROUND)
        (scaled_width, scaled_height), offset = self.layout(image.size)
        if scaled_width == 0 or scaled_height == 0:
            logger.debug(f"Image {image.size} scales to nothing, leaving page blank")
            return canvas

        try:
            has_alpha = image.mode in ALPHA_MODES or "transparency" in image.info
            source = image.convert("RGBA" if has_alpha else "RGB")
            scaled = source.resize((scaled_width, scaled_height), self.resample)
        except (OSError, ValueError) as e:
            raise EncodeError(f"Cannot resample {image.mode} image: {e}") from e

        if has_alpha:
            canvas.paste(scaled, offset, scaled)
        else:
            canvas.paste(scaled, offset)
        return canvas

    def encode(self, canvas: Image.Image) -> bytes:
        """Encode a canvas as JPEG at the configured quality.

        Raises:
            EncodeError: If Pillow cannot encode the canvas
        """
        buffer = BytesIO()
        try:
            canvas.save(buffer, format="JPEG", quality=self.quality)
        except (OSError, ValueError) as e:
            raise EncodeError(f"JPEG encoding failed: {e}") from e
        return buffer.getvalue()

    def render(self, image: Image.Image) -> bytes:
        """Letterbox ``image`` onto the canvas and return the JPEG bytes."""
        return self.encode(self.compose(image))
