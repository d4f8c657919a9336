"""Tests for the text report generator."""

import pytest
from src.diff_engine import compare_dumps
from src.report_generator import (
    CyJdepsTarget,
    ReportSection,
    build_report_sections,
    format_cyjdeps_command,
    render_text_report,
)


@pytest.fixture
def report(header_block_dump, tabular_dump):
    """Comparison of the fixture dumps."""
    return compare_dumps(header_block_dump.splitlines(), tabular_dump.splitlines())


class TestReportSection:
    """Tests for section rendering."""

    def test_title_underlined(self):
        section = ReportSection(title="Missing:", lines=["a"])
        assert section.render() == "Missing:\n--------\na"


class TestCyJdepsCommand:
    """Tests for cyjdeps command formatting."""

    def test_plain_paths(self):
        target = CyJdepsTarget(app_directory="/data/apps", destination_file="out.txt")
        assert format_cyjdeps_command(target, "com.example.a") == (
            "python find_package.py /data/apps com.example.a >> out.txt"
        )

    def test_paths_with_spaces_quoted(self):
        target = CyJdepsTarget(
            app_directory="/data/downloaded apps",
            destination_file="app class analysis.txt"
        )
        assert format_cyjdeps_command(target, "com.example.a") == (
            "python find_package.py '/data/downloaded apps' com.example.a "
            ">> 'app class analysis.txt'"
        )

    def test_custom_script(self):
        target = CyJdepsTarget(app_directory="apps", destination_file="out", script="lookup.py")
        assert format_cyjdeps_command(target, "p").startswith("python lookup.py ")


class TestRenderTextReport:
    """Tests for the full report."""

    def test_section_order(self, report):
        titles = [s.title for s in build_report_sections(report)]
        assert titles == [
            "Old package exports:",
            "New package exports:",
            "Missing packages in new version:",
            "Major version differences:",
        ]

    def test_regression_lists(self, report):
        sections = build_report_sections(report)
        assert sections[2].lines == ["com.example.legacy"]
        assert sections[3].lines == ["org.apache.commons.io.input"]

    def test_bundle_listing(self, report):
        text = render_text_report(report)
        assert "Apache Commons IO (45)\n\torg.apache.commons.io\t2.4.0" in text
        assert "Skipped line 6: truncated row | 1.0.0" in text

    def test_shadowing_listed(self):
        lines = [
            "Bundle A",
            "--------",
            'Export-Package = com.example.a;version="1.0.0"',
            "",
            "Bundle B",
            "--------",
            'Export-Package = com.example.a;version="2.0.0"',
        ]
        report = compare_dumps(lines, lines)
        text = render_text_report(report)
        assert "\tcom.example.a\t2.0.0\n\t\tShades previous version: 1.0.0" in text

    def test_shadowing_listed_once_per_record(self):
        """A winning version exported twice by one bundle is annotated once."""
        lines = [
            "Bundle A",
            "--------",
            'Export-Package = com.example.a;version="1.0.0"',
            "",
            "Bundle B",
            "--------",
            'Export-Package = com.example.a;version="2.0.0",com.example.a;version="2.0.0"',
        ]
        report = compare_dumps(lines, lines)
        sections = build_report_sections(report)

        for section in sections[:2]:
            shades = [line for line in section.lines if "Shades previous version" in line]
            assert shades == ["\t\tShades previous version: 1.0.0"]

    def test_cyjdeps_output(self, report):
        target = CyJdepsTarget(app_directory="apps", destination_file="out.txt")
        sections = build_report_sections(report, cyjdeps=target)
        assert sections[2].lines == [
            "python find_package.py apps com.example.legacy >> out.txt"
        ]

    def test_ends_with_newline(self, report):
        assert render_text_report(report).endswith("\n")
