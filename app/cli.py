#!/usr/bin/env python3
"""
manifest-diff command line.

Compares two exported-package dumps and prints the text report.

Usage:
    python -m app.cli OLD_DUMP NEW_DUMP [--old-format F] [--new-format F]
                      [--cyjdeps APP_DIR DEST] [--log-level LEVEL]
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from app.config import settings
from src.diff_engine import compare_dumps
from src.report_generator import CyJdepsTarget, render_text_report
from src.snapshot_parser import DumpFormat, SnapshotParseError, split_dump_lines

logger = logging.getLogger(__name__)

EXIT_PARSE_ERROR = 2


def read_dump(path: str) -> list[str]:
    """Read a dump file as a list of lines."""
    return split_dump_lines(Path(path).read_text(encoding="utf-8"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Report packages dropped or major-bumped between two export dumps"
    )
    formats = [f.value for f in DumpFormat]
    parser.add_argument("old", help="Baseline dump file")
    parser.add_argument("new", help="Dump file to check against the baseline")
    parser.add_argument(
        "--old-format",
        choices=formats + ["auto"],
        default=settings.default_old_format.value,
        help="Layout of the baseline dump",
    )
    parser.add_argument(
        "--new-format",
        choices=formats + ["auto"],
        default=settings.default_new_format.value,
        help="Layout of the new dump",
    )
    parser.add_argument(
        "--cyjdeps",
        nargs=2,
        metavar=("APP_DIR", "DEST"),
        help="Print regressions as cyjdeps lookup commands",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level (default: %(default)s)",
    )
    return parser


def _to_format(value: str) -> Optional[DumpFormat]:
    if value == "auto":
        return None
    return DumpFormat(value)


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    cyjdeps = None
    if args.cyjdeps:
        cyjdeps = CyJdepsTarget(
            app_directory=args.cyjdeps[0],
            destination_file=args.cyjdeps[1],
            script=settings.cyjdeps_script,
        )

    try:
        report = compare_dumps(
            read_dump(args.old),
            read_dump(args.new),
            old_format=_to_format(args.old_format),
            new_format=_to_format(args.new_format),
            excluded_prefix=settings.excluded_package_prefix,
            unversioned_sentinel=settings.unversioned_sentinel,
        )
    except SnapshotParseError as e:
        logger.error("Parse error: %s", str(e))
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_PARSE_ERROR

    sys.stdout.write(render_text_report(report, cyjdeps))
    return 0


if __name__ == "__main__":
    sys.exit(main())
