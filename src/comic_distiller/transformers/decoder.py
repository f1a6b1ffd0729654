"""Image decoding for archive entries.

Entries are identified by their leading bytes only; file names and
extensions inside comic archives are not trusted. Detection lives in
``ImageFormat.sniff`` so every caller dispatches the same way.
"""

import logging
from enum import Enum
from io import BytesIO

from PIL import Image

from comic_distiller.exceptions import MalformedImageError, UnsupportedFormatError

logger = logging.getLogger(__name__)

DECODE_ERRORS = (OSError, SyntaxError, ValueError, EOFError, Image.DecompressionBombError)


class ImageFormat(Enum):
    """Supported source image formats, in sniffing order.

    Each member carries the Pillow plugin name and the MIME type.
    """

    JPEG = ("JPEG", "image/jpeg")
    PNG = ("PNG", "image/png")
    GIF = ("GIF", "image/gif")
    WEBP = ("WEBP", "image/webp")

    def __init__(self, pil_format: str, media_type: str) -> None:
        self.pil_format = pil_format
        self.media_type = media_type

    def matches(self, data: bytes) -> bool:
        """Check whether ``data`` starts with this format's signature."""
        if self is ImageFormat.JPEG:
            return data[:3] == b"\xff\xd8\xff"
        if self is ImageFormat.PNG:
            return data[:8] == b"\x89PNG\r\n\x1a\n"
        if self is ImageFormat.GIF:
            return data[:4] == b"GIF8"
        return len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WEBP"

    @classmethod
    def sniff(cls, data: bytes) -> "ImageFormat | None":
        """Identify the format of ``data`` from its magic bytes.

        Args:
            data: Raw entry bytes

        Returns:
            The first matching format, or None if no signature matches
        """
        for image_format in cls:
            if image_format.matches(data):
                return image_format
        return None


class ImageDecoder:
    """Decode raw entry bytes into a Pillow image.

    The sniffed format is the only codec Pillow is allowed to try, so an
    entry with a PNG signature is never handed to the JPEG decoder.
    """

    def decode(self, data: bytes, entry_name: str | None = None) -> Image.Image:
        """Decode an image from raw bytes.

        Args:
            data: Raw entry bytes
            entry_name: Archive entry name, attached to raised errors

        Returns:
            Fully loaded image (first frame for animations)

        Raises:
            UnsupportedFormatError: If no supported signature matches
            MalformedImageError: If the matching codec cannot decode the data
        """
        image_format = ImageFormat.sniff(data)
        if image_format is None:
            raise UnsupportedFormatError(
                f"Unsupported image format: {entry_name or '<bytes>'}",
                entry_name=entry_name,
            )

        try:
            image = Image.open(BytesIO(data), formats=[image_format.pil_format])
            image.load()
        except DECODE_ERRORS as e:
            raise MalformedImageError(
                f"Malformed {image_format.name} image {entry_name or '<bytes>'}: {e}",
                entry_name=entry_name,
            ) from e

        logger.debug(
            f"Decoded {image_format.name} {entry_name or '<bytes>'} "
            f"({image.width}x{image.height}, mode {image.mode})"
        )
        return image
