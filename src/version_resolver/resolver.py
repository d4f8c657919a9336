"""
Version resolution.

Folds every export of a snapshot into one version per package. When
several bundles export the same package, the highest version wins and
the displaced export is recorded as shadowed. Keeping the maximum is
commutative and associative, so the resolved versions do not depend on
bundle order.
"""

import logging
from typing import Iterable

from src.snapshot_parser.models import BundleExportSnapshot, PackageExport, Version

from .models import ResolvedVersionMap, ShadowedExport

logger = logging.getLogger(__name__)


def outranks(candidate: Version, existing: Version) -> bool:
    """
    Check whether a candidate version replaces an existing one.

    Versions are ordered by (major, minor, micro); when those match, the
    qualifier breaks the tie (no qualifier sorts lowest, then string
    order) so the winner does not depend on traversal order.
    """
    if candidate.key != existing.key:
        return candidate > existing
    return (candidate.qualifier or "") > (existing.qualifier or "")


def fold_export(resolved: ResolvedVersionMap, export: PackageExport) -> None:
    """
    Merge one export into a resolved map.

    Unseen packages are inserted. A seen package is replaced only when
    the new version outranks it; identical or lower versions leave the
    existing entry untouched.
    """
    name = export.package_name
    existing = resolved.versions.get(name)

    if existing is None:
        resolved.versions[name] = export.version
        resolved.providers[name] = export.source_bundle
        return

    if outranks(export.version, existing):
        shadow = ShadowedExport(
            package_name=name,
            shadowed_version=existing,
            shadowed_bundle=resolved.providers[name],
            winning_version=export.version,
            winning_bundle=export.source_bundle
        )
        resolved.shadowed.append(shadow)
        resolved.versions[name] = export.version
        resolved.providers[name] = export.source_bundle
        logger.debug(
            "Shadowed export | package=%s previous=%s (%s) winner=%s (%s)",
            name,
            shadow.shadowed_version,
            shadow.shadowed_bundle,
            shadow.winning_version,
            shadow.winning_bundle,
        )


def resolve_exports(exports: Iterable[PackageExport]) -> ResolvedVersionMap:
    """Resolve a flat sequence of exports."""
    resolved = ResolvedVersionMap()
    for export in exports:
        fold_export(resolved, export)
    return resolved


def resolve_versions(snapshot: BundleExportSnapshot) -> ResolvedVersionMap:
    """
    Resolve a snapshot into one version per package.

    Args:
        snapshot: Per-bundle exports from a format adapter

    Returns:
        ResolvedVersionMap with versions, providers and shadowing records

    Example:
        >>> resolved = resolve_versions(snapshot)
        >>> str(resolved.versions["com.example.api"])
        '2.0.0'
    """
    resolved = resolve_exports(snapshot.exports())

    logger.info(
        "Resolved versions | bundles=%d packages=%d shadowed=%d",
        snapshot.bundle_count,
        len(resolved),
        len(resolved.shadowed),
    )
    return resolved
