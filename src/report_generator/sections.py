"""
Section builders for the text report.

Each builder is a pure function returning one ReportSection.
"""

from typing import Iterable, Optional

from src.snapshot_parser.models import BundleExportSnapshot
from src.version_resolver.models import ResolvedVersionMap

from .models import CyJdepsTarget, ReportSection


def _quote_if_spaced(value: str) -> str:
    if " " in value:
        return f"'{value}'"
    return value


def format_cyjdeps_command(target: CyJdepsTarget, package_name: str) -> str:
    """
    Render the cyjdeps lookup command for one package.

    Example:
        >>> target = CyJdepsTarget(app_directory="/data/my apps", destination_file="out.txt")
        >>> format_cyjdeps_command(target, "com.example.api")
        "python find_package.py '/data/my apps' com.example.api >> out.txt"
    """
    return (
        f"python {target.script} {_quote_if_spaced(target.app_directory)} "
        f"{package_name} >> {_quote_if_spaced(target.destination_file)}"
    )


def build_exports_section(
    title: str,
    snapshot: BundleExportSnapshot,
    resolved: ResolvedVersionMap
) -> ReportSection:
    """
    List exports per bundle.

    Exports that displaced a lower version of the same package are
    followed by the version they shadow.
    """
    lines = []
    for bundle, exports in snapshot.bundles.items():
        lines.append(bundle)
        # Each shadowing record is printed once, under the first matching export.
        shadows = resolved.shadowed_by_bundle(bundle)
        for export in exports:
            lines.append(f"\t{export.package_name}\t{export.version}")
            matched = [
                s for s in shadows
                if s.package_name == export.package_name
                and s.winning_version == export.version
            ]
            for shadow in matched:
                lines.append(f"\t\tShades previous version: {shadow.shadowed_version}")
                shadows.remove(shadow)

    for anomaly in snapshot.anomalies:
        lines.append(f"Skipped line {anomaly.line_number}: {anomaly.raw_line}")

    return ReportSection(title=title, lines=lines)


def build_package_list_section(
    title: str,
    package_names: Iterable[str],
    cyjdeps: Optional[CyJdepsTarget] = None
) -> ReportSection:
    """List package names, sorted, optionally as cyjdeps commands."""
    lines = []
    for name in sorted(package_names):
        if cyjdeps is not None:
            lines.append(format_cyjdeps_command(cyjdeps, name))
        else:
            lines.append(name)
    return ReportSection(title=title, lines=lines)
