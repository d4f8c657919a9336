"""Tests for the diff engine and the comparison pipeline."""

import pytest
from src.diff_engine import compare_dumps, compute_diff
from src.snapshot_parser import DumpFormat, ManifestHeaderError, Version
from src.version_resolver import ResolvedVersionMap


def _resolved(versions: dict[str, str]) -> ResolvedVersionMap:
    return ResolvedVersionMap(
        versions={name: Version.parse(v) for name, v in versions.items()},
        providers={name: "bundle" for name in versions},
    )


class TestComputeDiff:
    """Tests for comparing resolved maps."""

    def test_end_to_end_scenario(self):
        """Dropped and major-bumped packages are reported."""
        old = _resolved({"a": "1.0.0", "b": "2.0.0", "c": "1.5.0"})
        new = _resolved({"a": "1.0.0", "c": "2.0.0"})

        diff = compute_diff(old, new)

        assert diff.missing == {"b"}
        assert diff.major_mismatch == {"c"}
        assert diff.has_regressions is True

    def test_change_details(self):
        """Mismatches carry both versions, sorted by name."""
        old = _resolved({"z": "1.0.0", "c": "1.5.0"})
        new = _resolved({"z": "3.0.0", "c": "2.0.0"})

        diff = compute_diff(old, new)

        assert [c.package_name for c in diff.changes] == ["c", "z"]
        assert str(diff.changes[0].old_version) == "1.5.0"
        assert str(diff.changes[0].new_version) == "2.0.0"

    def test_minor_and_micro_changes_ignored(self):
        """Only major changes count."""
        old = _resolved({"a": "1.0.0", "b": "1.2.3"})
        new = _resolved({"a": "1.9.0", "b": "1.2.4.SNAPSHOT"})

        diff = compute_diff(old, new)

        assert diff.major_mismatch == set()
        assert diff.has_regressions is False

    def test_major_downgrade_reported(self):
        """A lower major version is a mismatch too."""
        diff = compute_diff(_resolved({"a": "3.0.0"}), _resolved({"a": "2.9.9"}))
        assert diff.major_mismatch == {"a"}

    def test_new_only_packages_ignored(self):
        """Packages added by the new map are not regressions."""
        diff = compute_diff(_resolved({}), _resolved({"a": "1.0.0"}))
        assert diff.missing == set()
        assert diff.major_mismatch == set()


class TestCompareDumps:
    """Tests for the full pipeline."""

    def test_header_block_against_tabular(self, header_block_dump, tabular_dump):
        """Both layouts feed the same comparison."""
        report = compare_dumps(
            header_block_dump.splitlines(),
            tabular_dump.splitlines(),
            old_format=DumpFormat.HEADER_BLOCK,
            new_format=DumpFormat.TABULAR,
        )

        assert report.diff.missing == {"com.example.legacy"}
        assert report.diff.major_mismatch == {"org.apache.commons.io.input"}
        assert len(report.new_snapshot.anomalies) == 1

    def test_formats_detected(self, header_block_dump, tabular_dump):
        """Formats are detected when not given."""
        report = compare_dumps(header_block_dump.splitlines(), tabular_dump.splitlines())
        assert report.old_snapshot.format == DumpFormat.HEADER_BLOCK
        assert report.new_snapshot.format == DumpFormat.TABULAR

    def test_identical_dumps(self, header_block_dump):
        """A dump compared with itself has no regressions."""
        lines = header_block_dump.splitlines()
        report = compare_dumps(lines, lines)
        assert report.diff.has_regressions is False

    def test_parse_error_propagates(self, tabular_dump):
        """Malformed header blocks fail the comparison."""
        broken = ["Bundle A", "--------", "no separator here"]
        with pytest.raises(ManifestHeaderError):
            compare_dumps(broken, tabular_dump.splitlines())
