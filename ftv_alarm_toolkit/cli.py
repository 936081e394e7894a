"""Command line utility to export FactoryTalk View alarm tags to Excel."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from . import __version__
from .converter import (
    ConversionOptions,
    collect_input_files,
    default_output_path,
    export_files,
)

log = logging.getLogger("ftv-alarm-export")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ftv-alarm-export",
        description=(
            "Rebuild PLC tag addresses from FactoryTalk View alarm XML "
            "exports and write them to an Excel sheet"
        ),
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        help="Alarm export .xml files, or folders containing them",
    )
    parser.add_argument(
        "-o", "--output",
        default="",
        help="Destination .xlsx (default: Alarm_Tags.xlsx next to the first input)",
    )
    parser.add_argument(
        "--ignore-blank-descriptions",
        action="store_true",
        help="Skip alarms whose description is empty",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of files parsed in parallel (default: automatic)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log per-file details",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        stream=sys.stderr,
    )

    if args.workers is not None and args.workers < 1:
        parser.error("--workers must be at least 1")

    files = collect_input_files(args.inputs)
    if not files:
        print("No XML files found in the given paths.", file=sys.stderr)
        return 1

    output = args.output or default_output_path(files[0])
    options = ConversionOptions(
        ignore_blank_descriptions=args.ignore_blank_descriptions,
        max_workers=args.workers,
    )

    try:
        result = export_files(files, output, options)
    except (OSError, ValueError) as exc:
        log.error("Export failed: %s", exc)
        print(f"Export failed: {exc}", file=sys.stderr)
        return 1

    print(f"Exported {result.exported_rows} of {result.total_rows} rows to {output}")
    print(result.summary())
    for path, message in result.failures.items():
        print(f"FAILED {path}: {message}", file=sys.stderr)

    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
