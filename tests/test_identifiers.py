"""Tests for document identifier generation."""

import re
from unittest.mock import patch

from comic_distiller.identifiers import generate_identifier

IDENTIFIER_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$"
)


class TestGenerateIdentifier:
    def test_format(self):
        """Identifiers are 4-2-2-2-6 byte hex groups with version 4."""
        assert IDENTIFIER_PATTERN.match(generate_identifier())

    def test_version_and_variant_bits(self):
        """Version and variant bits are forced regardless of random input."""
        with patch("comic_distiller.identifiers.os.urandom", return_value=b"\xff" * 16):
            assert generate_identifier() == "ffffffff-ffff-4fff-bfff-ffffffffffff"
        with patch("comic_distiller.identifiers.os.urandom", return_value=b"\x00" * 16):
            assert generate_identifier() == "00000000-0000-4000-8000-000000000000"

    def test_identifiers_are_unique(self):
        """Repeated calls produce different identifiers."""
        assert len({generate_identifier() for _ in range(100)}) == 100

    def test_falls_back_to_time(self, caplog):
        """Without a randomness source, a time-based hex value is returned."""
        with patch(
            "comic_distiller.identifiers.os.urandom",
            side_effect=NotImplementedError("no source"),
        ), patch("comic_distiller.identifiers.time.time_ns", return_value=0xABCDEF):
            assert generate_identifier() == "abcdef"
        assert "no source" in caplog.text
