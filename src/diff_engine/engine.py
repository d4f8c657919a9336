"""
Diff engine.

Compares two resolved maps and reports the packages that were dropped
and the shared packages whose major version changed. Minor, micro and
qualifier changes are not reported.
"""

import logging
from typing import Optional, Sequence

from src.snapshot_parser import DumpFormat, parse_snapshot
from src.snapshot_parser.header_block import DEFAULT_EXCLUDED_PREFIX, DEFAULT_UNVERSIONED_SENTINEL
from src.version_resolver import ResolvedVersionMap, resolve_versions

from .models import ComparisonReport, DiffResult, MajorVersionChange

logger = logging.getLogger(__name__)


def find_missing(old: ResolvedVersionMap, new: ResolvedVersionMap) -> set[str]:
    """Packages present in the old map and absent from the new map."""
    return old.package_names() - new.package_names()


def find_major_changes(
    old: ResolvedVersionMap,
    new: ResolvedVersionMap
) -> list[MajorVersionChange]:
    """Shared packages whose major version differs, sorted by name."""
    shared = old.package_names() & new.package_names()
    changes = []
    for name in sorted(shared):
        old_version = old.versions[name]
        new_version = new.versions[name]
        if old_version.major != new_version.major:
            changes.append(MajorVersionChange(
                package_name=name,
                old_version=old_version,
                new_version=new_version
            ))
    return changes


def compute_diff(old: ResolvedVersionMap, new: ResolvedVersionMap) -> DiffResult:
    """
    Compare two resolved maps.

    Args:
        old: Resolved versions of the earlier snapshot
        new: Resolved versions of the later snapshot

    Returns:
        DiffResult with missing packages and major version mismatches

    Example:
        >>> diff = compute_diff(old_map, new_map)
        >>> sorted(diff.missing)
        ['b']
        >>> sorted(diff.major_mismatch)
        ['c']
    """
    missing = find_missing(old, new)
    changes = find_major_changes(old, new)

    logger.info(
        "Computed diff | old=%d new=%d missing=%d major_mismatch=%d",
        len(old),
        len(new),
        len(missing),
        len(changes),
    )

    return DiffResult(
        missing=missing,
        major_mismatch={c.package_name for c in changes},
        changes=changes
    )


def compare_dumps(
    old_lines: Sequence[str],
    new_lines: Sequence[str],
    old_format: Optional[DumpFormat] = None,
    new_format: Optional[DumpFormat] = None,
    excluded_prefix: str = DEFAULT_EXCLUDED_PREFIX,
    unversioned_sentinel: str = DEFAULT_UNVERSIONED_SENTINEL,
) -> ComparisonReport:
    """
    Run the full pipeline over two dumps.

    Each dump is parsed and resolved independently; only the final
    comparison needs both.

    Args:
        old_lines: Lines of the earlier dump
        new_lines: Lines of the later dump
        old_format: Layout of the earlier dump (detected when None)
        new_format: Layout of the later dump (detected when None)
        excluded_prefix: Package prefix left out of header-block dumps
        unversioned_sentinel: Version text treated as unversioned

    Returns:
        ComparisonReport with snapshots, resolved maps and diff

    Raises:
        SnapshotParseError: If either dump cannot be parsed
    """
    old_snapshot = parse_snapshot(old_lines, old_format, excluded_prefix, unversioned_sentinel)
    new_snapshot = parse_snapshot(new_lines, new_format, excluded_prefix, unversioned_sentinel)

    old_versions = resolve_versions(old_snapshot)
    new_versions = resolve_versions(new_snapshot)

    return ComparisonReport(
        old_snapshot=old_snapshot,
        new_snapshot=new_snapshot,
        old_versions=old_versions,
        new_versions=new_versions,
        diff=compute_diff(old_versions, new_versions)
    )
