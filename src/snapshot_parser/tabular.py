"""
Adapter for tabular dumps.

One row per exported package:

    Package             │ Version │ Optional │ Bundle
    ────────────────────┼─────────┼──────────┼──────────────────
    com.example.api     │ 1.2.0   │          │ Example API (51)

Columns are separated by '|' or the box-drawing '│' depending on the
console version that produced the dump.
"""

import logging
import re
from typing import Iterable

from .errors import SnapshotParseError, VersionFormatError
from .models import BundleExportSnapshot, DumpFormat, PackageExport, RowAnomaly, Version

logger = logging.getLogger(__name__)

COLUMN_SEPARATOR = re.compile("[|│]")
HEADER_LINE_COUNT = 2
MIN_COLUMNS = 4

PACKAGE_COLUMN = 0
VERSION_COLUMN = 1
BUNDLE_COLUMN = 3


def split_row(line: str) -> list[str]:
    """Split a table row on either separator and trim every field."""
    return [field.strip() for field in COLUMN_SEPARATOR.split(line)]


def parse_tabular_dump(lines: Iterable[str]) -> BundleExportSnapshot:
    """
    Convert a tabular dump into a snapshot.

    The first two lines (column titles and rule) are discarded. Rows
    with fewer than four columns, blank rows included, are recorded as
    anomalies and skipped.

    Args:
        lines: Dump lines in order

    Returns:
        BundleExportSnapshot grouped by the bundle column

    Raises:
        SnapshotParseError: If a row has an unparseable version
    """
    snapshot = BundleExportSnapshot(format=DumpFormat.TABULAR)

    for line_number, raw in enumerate(lines, start=1):
        if line_number <= HEADER_LINE_COUNT:
            continue

        line = raw.rstrip("\r\n")
        columns = split_row(line)
        if len(columns) < MIN_COLUMNS:
            anomaly = RowAnomaly(
                line_number=line_number,
                raw_line=line,
                columns=columns,
                message=f"Expected at least {MIN_COLUMNS} columns, found {len(columns)}"
            )
            snapshot.anomalies.append(anomaly)
            logger.warning(
                "Skipping row | line=%d columns=%s",
                line_number,
                columns,
            )
            continue

        package_name = columns[PACKAGE_COLUMN]
        bundle = columns[BUNDLE_COLUMN]
        try:
            version = Version.parse(columns[VERSION_COLUMN])
        except VersionFormatError as e:
            raise SnapshotParseError(
                f"Unparseable version {columns[VERSION_COLUMN]!r} on line {line_number}",
                bundle=bundle,
                package=package_name
            ) from e

        snapshot.add_bundle(bundle, [PackageExport(
            package_name=package_name,
            version=version,
            source_bundle=bundle
        )])

    logger.info(
        "Parsed tabular dump | bundles=%d exports=%d anomalies=%d",
        snapshot.bundle_count,
        snapshot.export_count,
        len(snapshot.anomalies),
    )
    return snapshot
