"""
Adapter for header-block dumps.

A header-block dump repeats, for every bundle:

    Bundle Name (42)
    ----------------
    Header-Name = value
    Export-Package = com.example.api;version="1.0.0"
    <blank line>
    trailing commentary, ignored until the next divider

Header lines use " = " where manifests use ": ", so the first " = " of
every line is rewritten before the block goes through the manifest
header parser.
"""

import logging
from typing import Iterable, Optional

from .errors import ManifestHeaderError, SnapshotParseError, VersionFormatError
from .headers import EXPORT_PACKAGE_HEADER, find_header, parse_export_clauses, parse_manifest_headers
from .models import BundleExportSnapshot, DumpFormat, PackageExport, Version

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDED_PREFIX = "org.cytoscape"
DEFAULT_UNVERSIONED_SENTINEL = "0.0.0"
MIN_DIVIDER_LENGTH = 5


def is_divider(previous_line: Optional[str], line: str) -> bool:
    """
    Check whether a line underlines the line before it.

    A divider is made only of dashes, is longer than 4 characters and
    has exactly the length of the previous line.

    Args:
        previous_line: Line read just before (None at start of input)
        line: Candidate divider line

    Returns:
        True if the line is a title underline
    """
    if previous_line is None:
        return False
    if len(previous_line) != len(line):
        return False
    return len(line) >= MIN_DIVIDER_LENGTH and line == "-" * len(line)


def rewrite_header_line(line: str) -> str:
    """Replace the first " = " with the manifest ": " separator."""
    return line.replace(" = ", ": ", 1)


def is_excluded(
    package_name: str,
    version_text: Optional[str],
    excluded_prefix: str = DEFAULT_EXCLUDED_PREFIX,
    unversioned_sentinel: str = DEFAULT_UNVERSIONED_SENTINEL,
) -> bool:
    """
    Check whether an exported package is left out of the snapshot.

    Packages in the platform's own namespace and exports without a
    usable version are not tracked.
    """
    if excluded_prefix and package_name.startswith(excluded_prefix):
        return True
    if version_text is None:
        return True
    return version_text.strip() == unversioned_sentinel


def extract_bundle_exports(
    bundle: str,
    block: list[str],
    excluded_prefix: str = DEFAULT_EXCLUDED_PREFIX,
    unversioned_sentinel: str = DEFAULT_UNVERSIONED_SENTINEL,
) -> list[PackageExport]:
    """
    Read the Export-Package header of one bundle's header block.

    Args:
        bundle: Bundle name the block belongs to
        block: Rewritten header lines
        excluded_prefix: Package prefix to leave out
        unversioned_sentinel: Version text treated as unversioned

    Returns:
        Exports kept after the exclusion rule

    Raises:
        ManifestHeaderError: If the block has malformed header syntax
        SnapshotParseError: If a kept export has an unparseable version
    """
    try:
        headers = parse_manifest_headers(block)
        clauses = parse_export_clauses(find_header(headers, EXPORT_PACKAGE_HEADER))
    except ManifestHeaderError as e:
        raise ManifestHeaderError(e.message, bundle=bundle) from e

    exports = []
    for clause in clauses:
        version_text = clause.attributes.get("version")
        for package_name in clause.packages:
            if is_excluded(package_name, version_text, excluded_prefix, unversioned_sentinel):
                continue
            try:
                version = Version.parse(version_text)
            except VersionFormatError as e:
                raise SnapshotParseError(
                    f"Unparseable version {version_text!r}",
                    bundle=bundle,
                    package=package_name
                ) from e
            exports.append(PackageExport(
                package_name=package_name,
                version=version,
                source_bundle=bundle
            ))

    return exports


def parse_header_block_dump(
    lines: Iterable[str],
    excluded_prefix: str = DEFAULT_EXCLUDED_PREFIX,
    unversioned_sentinel: str = DEFAULT_UNVERSIONED_SENTINEL,
) -> BundleExportSnapshot:
    """
    Convert a header-block dump into a snapshot.

    Scanning state (current bundle, its block, blank lines seen since the
    divider, previous line) is local to this call.

    Args:
        lines: Dump lines in order
        excluded_prefix: Package prefix to leave out
        unversioned_sentinel: Version text treated as unversioned

    Returns:
        BundleExportSnapshot with one entry per bundle block

    Raises:
        ManifestHeaderError: If a block has malformed header syntax
        SnapshotParseError: If a kept export has an unparseable version
    """
    snapshot = BundleExportSnapshot(format=DumpFormat.HEADER_BLOCK)

    bundle: Optional[str] = None
    block: Optional[list[str]] = None
    blank_lines = 0
    previous: Optional[str] = None

    def flush() -> None:
        if bundle is not None and block is not None:
            snapshot.add_bundle(bundle, extract_bundle_exports(
                bundle, block, excluded_prefix, unversioned_sentinel
            ))

    for raw in lines:
        line = raw.rstrip("\r\n")

        if is_divider(previous, line):
            flush()
            bundle = previous
            block = []
            blank_lines = 0
        elif block is not None and blank_lines < 1:
            block.append(rewrite_header_line(line))

        if not line.strip():
            blank_lines += 1
        previous = line

    flush()

    logger.info(
        "Parsed header-block dump | bundles=%d exports=%d",
        snapshot.bundle_count,
        snapshot.export_count,
    )
    return snapshot
