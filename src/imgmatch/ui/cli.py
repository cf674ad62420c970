# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from imgmatch.app import (
    default_image_folder,
    list_collections,
    load_collection,
    replace_collection_images,
    upload_archive,
)
from imgmatch.config import ConfigurationError, configure_logging, parse_extensions
from imgmatch.domain.errors import ImageMatchError
from imgmatch.ui.report import render_report

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Match compendium records to image files")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    match = subparsers.add_parser("match", help="Replace record images by name matching")
    match.add_argument("collection", type=str, help="Collection id, e.g. daggerheart.adversaries")
    match.add_argument(
        "--folder",
        type=str,
        help="Folder to scan, relative to the assets root (defaults to the last used folder)",
    )
    match.add_argument(
        "--no-recursive",
        dest="recursive",
        action="store_false",
        help="Only scan the folder itself, not its subfolders",
    )
    match.add_argument(
        "--extensions",
        type=str,
        help="Comma separated list of allowed file extensions (defaults to config)",
    )
    match.add_argument(
        "--apply",
        action="store_true",
        help="Write the matched images (the default is a dry run)",
    )
    match.add_argument(
        "--import-first",
        action="store_true",
        help="Import matched records into the world store before updating them",
    )
    match.add_argument(
        "--world-folder",
        type=str,
        help="World folder that imported records are placed in (defaults to config)",
    )

    unzip = subparsers.add_parser("unzip", help="Unpack a zip archive into the assets root")
    unzip.add_argument("archive", type=Path, help="Path of the .zip file to unpack")
    unzip.add_argument(
        "--dest",
        type=str,
        help="Destination folder relative to the assets root (defaults to the last used)",
    )
    unzip.add_argument(
        "--no-overwrite",
        dest="overwrite",
        action="store_false",
        help="Keep files that already exist at the destination",
    )

    load = subparsers.add_parser("load", help="Load a compendium export into the record store")
    load.add_argument("export", type=Path, help="Path of the exported compendium JSON")

    subparsers.add_parser("collections", help="List loaded collections")

    return parser.parse_args(list(argv))


class _ProgressPrinter:
    """Render extraction progress as a single updating percentage line."""

    def __init__(self) -> None:
        self._last_percent: int | None = None

    def __call__(self, done: int, total: int) -> None:
        percent = round(done / total * 100) if total else 100
        if percent == self._last_percent:
            return
        self._last_percent = percent
        end = "\n" if done >= total else ""
        print(f"\rUnpacking: {percent:3d}%", end=end, file=sys.stderr, flush=True)


def _run_match(args: argparse.Namespace) -> None:
    extensions = parse_extensions(args.extensions) if args.extensions else None
    report = replace_collection_images(
        collection_id=args.collection,
        folder=args.folder,
        recursive=args.recursive,
        extensions=extensions,
        dry_run=not args.apply,
        import_first=args.import_first,
        world_folder=args.world_folder,
    )
    print(render_report(report))
    if report.dry_run:
        log.info("Dry run complete.")
    else:
        log.info("Done. Updated %s item(s).", report.updated)


def _run_unzip(args: argparse.Namespace) -> None:
    destination = args.dest or default_image_folder()
    result = upload_archive(
        args.archive,
        destination,
        overwrite=args.overwrite,
        on_progress=_ProgressPrinter(),
        verbose=args.verbose,
    )
    log.info(
        "Done. Unpacked %s file(s) to %s (skipped=%s, failed=%s).",
        result.written,
        result.destination,
        result.skipped,
        result.failed,
    )


def _run_load(args: argparse.Namespace) -> None:
    collection, count = load_collection(args.export)
    log.info("Loaded %s record(s) into %s", count, collection.id)


def _run_collections(_args: argparse.Namespace) -> None:
    for collection in list_collections():
        lock = " (locked)" if collection.locked else ""
        print(f"{collection.id} [{collection.document_type}] {collection.label}{lock}")


_COMMANDS = {
    "match": _run_match,
    "unzip": _run_unzip,
    "load": _run_load,
    "collections": _run_collections,
}


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        command = _COMMANDS[parsed_args.command]
    except KeyError:
        log.error("Unsupported command: %s", parsed_args.command)  # noqa: TRY400
        sys.exit(2)

    try:
        command(parsed_args)
    except (ValueError, ConfigurationError, OSError) as exc:
        log.error("Invalid input: %s", exc)  # noqa: TRY400
        sys.exit(2)
    except ImageMatchError as exc:
        log.error("%s", exc)  # noqa: TRY400
        log.debug("Failure detail", exc_info=exc)
        sys.exit(1)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
