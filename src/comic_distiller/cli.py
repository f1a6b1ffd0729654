"""Command-line interface for comic-distiller."""

import argparse
import logging
import sys
import time
from pathlib import Path

from pydantic import ValidationError

from comic_distiller.pipeline.orchestrator import Orchestrator
from comic_distiller.readers.scanner import ARCHIVE_SUFFIX, find_archives
from schemas.settings import RenderSettings

DEFAULT_OUTPUT_DIRNAME = "convert"
DEFAULT_SETTINGS = RenderSettings()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def default_output_dir(path: Path) -> Path:
    """Output directory used when --output is not given.

    A ``convert`` directory inside the scanned directory, or next to a
    single archive.
    """
    base = path if path.is_dir() else path.parent
    return base / DEFAULT_OUTPUT_DIRNAME


def convert(args: argparse.Namespace) -> int:
    """Execute the convert command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 when every archive was converted, 1 otherwise)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)
    started = time.perf_counter()

    try:
        settings = RenderSettings(
            width=args.width,
            height=args.height,
            quality=args.quality,
            extract=args.extract,
            workers=args.workers,
        )
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            logger.error(f"Invalid --{field}: {error['msg']}")
        return 1

    path = args.path.resolve()
    if not path.exists():
        logger.error(f"Path not found: {path}")
        return 1

    output_dir = (args.output or default_output_dir(path)).resolve()

    if path.is_dir():
        archives = find_archives(path, recursive=args.recursive, exclude=output_dir)
        root = path
    elif path.suffix.lower() == ARCHIVE_SUFFIX:
        archives = [path]
        root = path.parent
    else:
        logger.error(f"Not a {ARCHIVE_SUFFIX} archive: {path}")
        return 1

    if not archives:
        logger.error(f"No {ARCHIVE_SUFFIX} archives found in {path}")
        return 1

    logger.info(f"Found {len(archives)} archive(s)")
    if settings.extract:
        logger.info("Mode: extracting images")
    logger.info(
        f"Canvas: {settings.width}x{settings.height}, quality {settings.quality}"
    )

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Cannot create output directory {output_dir}: {e}")
        return 1

    orchestrator = Orchestrator(output_dir=output_dir, settings=settings)
    results = orchestrator.convert_all(archives, root=root)

    failed = [r for r in results if not r.succeeded]
    for result in results:
        logger.info(f"{result.id}: {result.status} ({result.page_count} pages)")
        if result.validation_errors:
            logger.warning(f"  Errors: {len(result.validation_errors)}")
            for error in result.validation_errors:
                logger.warning(f"    - {error}")

    logger.info(f"Output: {output_dir}")
    logger.info(f"Processing completed in {time.perf_counter() - started:.2f}s")
    return 1 if failed else 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="comic-distiller",
        description="Convert comic-book archives (CBZ) into EPUB documents",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert CBZ archives to EPUB or image directories",
        description="Decode every page of one or more CBZ archives, fit it onto a fixed canvas, and package the pages as an EPUB (or a directory of images with --extract).",
    )
    convert_parser.add_argument(
        "path",
        type=Path,
        help="A .cbz archive or a directory containing archives",
    )
    convert_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help=f"Output directory (default: <path>/{DEFAULT_OUTPUT_DIRNAME})",
    )
    convert_parser.add_argument(
        "--recursive",
        action="store_true",
        help="Scan directories recursively",
    )
    convert_parser.add_argument(
        "--extract",
        action="store_true",
        help="Extract images to a directory instead of building an EPUB",
    )
    convert_parser.add_argument(
        "--width",
        type=int,
        default=DEFAULT_SETTINGS.width,
        help=f"Image width (default: {DEFAULT_SETTINGS.width}, minimum 128)",
    )
    convert_parser.add_argument(
        "--height",
        type=int,
        default=DEFAULT_SETTINGS.height,
        help=f"Image height (default: {DEFAULT_SETTINGS.height}, minimum 128)",
    )
    convert_parser.add_argument(
        "--quality",
        type=int,
        default=DEFAULT_SETTINGS.quality,
        help=f"JPEG quality (default: {DEFAULT_SETTINGS.quality}, range 0-100)",
    )
    convert_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Decode/render threads per archive (default: CPU count)",
    )
    convert_parser.set_defaults(func=convert)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
