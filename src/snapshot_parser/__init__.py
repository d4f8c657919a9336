"""
Exported-Package Snapshot Parser

Turns console dumps of a module system's exported packages into
per-bundle snapshots. Two dump layouts are supported: manifest
header blocks and package tables.
"""

__version__ = "0.1.0"

from .errors import (
    ManifestHeaderError,
    SnapshotParseError,
    VersionFormatError,
)
from .models import (
    BundleExportSnapshot,
    DumpFormat,
    ExportClause,
    PackageExport,
    RowAnomaly,
    Version,
)
from .header_block import is_divider, parse_header_block_dump, rewrite_header_line
from .tabular import parse_tabular_dump
from .service import detect_format, parse_snapshot, split_dump_lines

__all__ = [
    "__version__",
    "ManifestHeaderError",
    "SnapshotParseError",
    "VersionFormatError",
    "BundleExportSnapshot",
    "DumpFormat",
    "ExportClause",
    "PackageExport",
    "RowAnomaly",
    "Version",
    "is_divider",
    "parse_header_block_dump",
    "rewrite_header_line",
    "parse_tabular_dump",
    "detect_format",
    "parse_snapshot",
    "split_dump_lines",
]
