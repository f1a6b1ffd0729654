"""Pytest fixtures for Comic Distiller tests."""

import zipfile
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image


def make_image_bytes(
    fmt: str,
    size: tuple[int, int] = (100, 200),
    color=(200, 30, 30),
    mode: str = "RGB",
) -> bytes:
    """Encode a solid-color image in the given Pillow format."""
    image = Image.new(mode, size, color)
    buffer = BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


def make_cbz(path: Path, entries: list[tuple[str, bytes | None]]) -> Path:
    """Write a zip archive; an entry with data None is a directory marker."""
    with zipfile.ZipFile(path, "w") as archive:
        for name, data in entries:
            if data is None:
                archive.writestr(zipfile.ZipInfo(name.rstrip("/") + "/"), b"")
            else:
                archive.writestr(name, data)
    return path


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image_bytes("JPEG")


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes("PNG")


@pytest.fixture
def gif_bytes() -> bytes:
    return make_image_bytes("GIF", mode="P", color=1)


@pytest.fixture
def webp_bytes() -> bytes:
    return make_image_bytes("WEBP")


@pytest.fixture
def sample_cbz(tmp_path, jpeg_bytes, png_bytes, gif_bytes) -> Path:
    """Archive with three decodable pages stored out of name order.

    Structure::

        issue.cbz
          b.png
          a.jpg
          c.gif
    """
    return make_cbz(
        tmp_path / "issue.cbz",
        [("b.png", png_bytes), ("a.jpg", jpeg_bytes), ("c.gif", gif_bytes)],
    )


@pytest.fixture
def mixed_cbz(tmp_path, jpeg_bytes, png_bytes, webp_bytes) -> Path:
    """Archive with three valid pages, two invalid entries and a directory."""
    return make_cbz(
        tmp_path / "mixed.cbz",
        [
            ("pages/", None),
            ("pages/03.webp", webp_bytes),
            ("pages/01.jpg", jpeg_bytes),
            ("ComicInfo.xml", b"<?xml version='1.0'?><ComicInfo/>"),
            ("pages/02.png", png_bytes),
            ("pages/04.jpg", b"\xff\xd8\xff" + b"not really a jpeg"),
        ],
    )
