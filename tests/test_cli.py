"""Tests for the CLI module."""

import zipfile
from unittest.mock import patch

import pytest

from comic_distiller.cli import default_output_dir, main

from conftest import make_cbz


class TestCLIConvert:
    def test_no_command_prints_help(self, capsys):
        """Running without a command prints help and succeeds."""
        assert main([]) == 0
        assert "convert" in capsys.readouterr().out

    def test_convert_single_archive(self, sample_cbz):
        """convert writes an EPUB into <parent>/convert by default."""
        result = main(["convert", str(sample_cbz), "--width", "200", "--height", "300"])

        assert result == 0
        epub = sample_cbz.parent / "convert" / "issue.epub"
        with zipfile.ZipFile(epub) as archive:
            assert "OEBPS/images/page003.jpeg" in archive.namelist()

    def test_convert_directory_with_output(self, tmp_path, sample_cbz, jpeg_bytes):
        """A directory is scanned and every archive converted."""
        make_cbz(tmp_path / "second.cbz", [("1.jpg", jpeg_bytes)])
        output = tmp_path / "out"

        result = main(["convert", str(tmp_path), "--output", str(output), "--workers", "2"])

        assert result == 0
        assert (output / "issue.epub").exists()
        assert (output / "second.epub").exists()

    def test_convert_recursive_extract(self, tmp_path, jpeg_bytes):
        """--recursive and --extract write nested image directories."""
        (tmp_path / "series").mkdir()
        make_cbz(tmp_path / "series" / "01.cbz", [("b.jpg", jpeg_bytes), ("a.jpg", jpeg_bytes)])

        result = main(["convert", str(tmp_path), "--recursive", "--extract"])

        assert result == 0
        extracted = tmp_path / "convert" / "series" / "01"
        assert sorted(p.name for p in extracted.iterdir()) == ["page001.jpeg", "page002.jpeg"]

    def test_non_recursive_skips_subdirectories(self, tmp_path, jpeg_bytes, caplog):
        """Without --recursive, nested archives are ignored."""
        (tmp_path / "series").mkdir()
        make_cbz(tmp_path / "series" / "01.cbz", [("a.jpg", jpeg_bytes)])

        assert main(["convert", str(tmp_path)]) == 1
        assert "No .cbz archives found" in caplog.text

    def test_failed_archive_sets_exit_code(self, tmp_path, sample_cbz, caplog):
        """A failed archive makes the command exit 1 after converting the rest."""
        (tmp_path / "broken.cbz").write_bytes(b"not a zip")

        result = main(["convert", str(tmp_path)])

        assert result == 1
        assert (tmp_path / "convert" / "issue.epub").exists()
        assert "broken" in caplog.text

    def test_missing_path(self, tmp_path, caplog):
        """convert fails for a path that does not exist."""
        assert main(["convert", str(tmp_path / "nope.cbz")]) == 1
        assert "Path not found" in caplog.text

    def test_non_archive_file(self, tmp_path, caplog):
        """convert refuses a file without the .cbz extension."""
        path = tmp_path / "book.zip"
        path.write_bytes(b"")
        assert main(["convert", str(path)]) == 1
        assert "Not a .cbz archive" in caplog.text

    @pytest.mark.parametrize(
        "flag, value",
        [("--width", "64"), ("--height", "127"), ("--quality", "101"), ("--workers", "0")],
    )
    def test_invalid_settings(self, sample_cbz, caplog, flag, value):
        """Out-of-range settings are reported and nothing is converted."""
        assert main(["convert", str(sample_cbz), flag, value]) == 1
        assert f"Invalid {flag}" in caplog.text
        assert not (sample_cbz.parent / "convert").exists()

    def test_settings_passed_to_orchestrator(self, sample_cbz):
        """Command-line settings reach the orchestrator."""
        with patch("comic_distiller.cli.Orchestrator") as mock_orchestrator:
            mock_orchestrator.return_value.convert_all.return_value = []
            main([
                "convert", str(sample_cbz),
                "--width", "300", "--height", "400", "--quality", "80", "--extract",
            ])

        settings = mock_orchestrator.call_args.kwargs["settings"]
        assert (settings.width, settings.height, settings.quality) == (300, 400, 80)
        assert settings.extract is True


class TestDefaultOutputDir:
    def test_directory_input(self, tmp_path):
        """A scanned directory gets a convert/ subdirectory."""
        assert default_output_dir(tmp_path) == tmp_path / "convert"

    def test_file_input(self, sample_cbz):
        """A single archive gets convert/ next to it."""
        assert default_output_dir(sample_cbz) == sample_cbz.parent / "convert"
