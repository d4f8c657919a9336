"""
Text report rendering service.

Renders a ComparisonReport in the order a maintainer reads it:
old exports, new exports, missing packages, major version changes.
"""

from typing import Optional

from src.diff_engine.models import ComparisonReport

from .models import CyJdepsTarget, ReportSection
from .sections import build_exports_section, build_package_list_section


def build_report_sections(
    report: ComparisonReport,
    cyjdeps: Optional[CyJdepsTarget] = None
) -> list[ReportSection]:
    """
    Build the report sections.

    Args:
        report: Result of comparing two dumps
        cyjdeps: When given, package lists are rendered as cyjdeps commands

    Returns:
        Sections in display order
    """
    return [
        build_exports_section("Old package exports:", report.old_snapshot, report.old_versions),
        build_exports_section("New package exports:", report.new_snapshot, report.new_versions),
        build_package_list_section(
            "Missing packages in new version:",
            report.diff.missing,
            cyjdeps
        ),
        build_package_list_section(
            "Major version differences:",
            report.diff.major_mismatch,
            cyjdeps
        ),
    ]


def render_text_report(
    report: ComparisonReport,
    cyjdeps: Optional[CyJdepsTarget] = None
) -> str:
    """
    Render the full text report.

    Sections are separated by a blank line.

    Example:
        >>> report = compare_dumps(old_lines, new_lines)
        >>> print(render_text_report(report))
    """
    sections = build_report_sections(report, cyjdeps)
    return "\n\n".join(section.render() for section in sections) + "\n"
