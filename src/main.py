# src/main.py — v3
"""CLI entry point: report, upload, download and delete commands.

Usage:
    filepanel list <owner>
    filepanel stats <owner>
    filepanel formats <owner>
    filepanel upload <owner> <file> [--name NAME] [--content-type TYPE]
    filepanel download <owner> <name> [-o PATH]
    filepanel delete <owner> <name>

Reports are printed as JSON on stdout. Configuration comes from .env
(see config/settings.py).
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import mimetypes
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from filepanel.version import __version__

if TYPE_CHECKING:
    from filepanel.reports.service import ReportService
    from filepanel.sources.base_item_source import BaseItemSource

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="filepanel",
        description=f"filepanel v{__version__} - stored file reports",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- reports ---
    for name, report_type, help_text in (
        ("list", "listing", "List an owner's files"),
        ("stats", "statistics", "Show file count and storage used"),
        ("formats", "formats", "Count an owner's files per format"),
    ):
        p_report = subparsers.add_parser(name, help=help_text)
        p_report.add_argument("owner", help="Owner id")
        p_report.set_defaults(func=_cmd_report, report_type=report_type)

    # --- upload ---
    p_upload = subparsers.add_parser("upload", help="Upload a file")
    p_upload.add_argument("owner", help="Owner id")
    p_upload.add_argument("file", type=Path, help="Local file to upload")
    p_upload.add_argument(
        "--name", default=None,
        help="Stored file name (default: local file name)",
    )
    p_upload.add_argument(
        "--content-type", default=None,
        help="Content type (default: guessed from the file name)",
    )
    p_upload.set_defaults(func=_cmd_upload)

    # --- delete ---
    p_delete = subparsers.add_parser("delete", help="Delete a stored file")
    p_delete.add_argument("owner", help="Owner id")
    p_delete.add_argument("name", help="Stored file name")
    p_delete.set_defaults(func=_cmd_delete)

    # --- download ---
    p_download = subparsers.add_parser("download", help="Download a stored file")
    p_download.add_argument("owner", help="Owner id")
    p_download.add_argument("name", help="Stored file name")
    p_download.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Destination path (default: the file name in the current directory)",
    )
    p_download.set_defaults(func=_cmd_download)

    return parser


def _build_runtime(verbose: bool) -> tuple[BaseItemSource, ReportService]:
    """Load settings, configure logging and wire source and service."""
    from filepanel.config.settings import load_settings
    from filepanel.logging.logger import setup_logging
    from filepanel.reports.service import ReportService
    from filepanel.sources.source_factory import create_item_source

    settings = load_settings()
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
    # Quiet noisy libraries
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    source = create_item_source(settings)
    return source, ReportService.from_settings(settings, source)


async def _cmd_report(args: argparse.Namespace) -> int:
    """Compute (or fetch from cache) one report and print it."""
    _, service = _build_runtime(args.verbose)
    report = await service.get_report(args.report_type, args.owner)
    print(report.model_dump_json(indent=2))
    return 0


async def _cmd_upload(args: argparse.Namespace) -> int:
    """Upload a local file, then drop the owner's cached reports."""
    file_path: Path = args.file
    if not file_path.is_file():
        logger.error("File not found: %s", file_path)
        return 1

    source, service = _build_runtime(args.verbose)
    name = args.name or file_path.name
    content_type = args.content_type or mimetypes.guess_type(name)[0]

    ref = await source.put_item(args.owner, name, file_path.read_bytes(), content_type)
    await service.coordinator.on_item_created(args.owner)
    print(f"Uploaded {file_path} -> {ref.storage_path}")
    return 0


async def _cmd_delete(args: argparse.Namespace) -> int:
    """Delete a stored file, then drop the owner's cached reports."""
    source, service = _build_runtime(args.verbose)
    if not await source.delete_item(args.owner, args.name):
        logger.error("File not found: %s", args.name)
        return 1

    await service.coordinator.on_item_deleted(args.owner)
    print(f"Deleted {args.name}")
    return 0


async def _cmd_download(args: argparse.Namespace) -> int:
    """Write a stored file to a local path."""
    source, _ = _build_runtime(args.verbose)
    body = await source.get_item(args.owner, args.name)
    if body is None:
        logger.error("File not found: %s", args.name)
        return 1

    output: Path = args.output or Path(Path(args.name).name)
    output.write_bytes(body)
    print(f"Downloaded {args.name} -> {output} ({len(body)} bytes)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
