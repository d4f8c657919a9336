"""
Pydantic models for snapshot comparison results.
"""

from pydantic import BaseModel, Field, ConfigDict

from src.snapshot_parser.models import BundleExportSnapshot, Version
from src.version_resolver.models import ResolvedVersionMap


class MajorVersionChange(BaseModel):
    """A shared package whose major version differs between snapshots."""

    package_name: str = Field(description="Package present in both snapshots")
    old_version: Version = Field(description="Resolved version in the old snapshot")
    new_version: Version = Field(description="Resolved version in the new snapshot")


class DiffResult(BaseModel):
    """
    Regressions between an old and a new resolved map.

    Only set membership of `missing` and `major_mismatch` is meaningful;
    `changes` repeats the mismatches with their versions, sorted by name.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "missing": ["com.example.legacy"],
                "major_mismatch": ["com.example.api"],
                "changes": [
                    {
                        "package_name": "com.example.api",
                        "old_version": {"major": 1, "minor": 5, "micro": 0},
                        "new_version": {"major": 2, "minor": 0, "micro": 0}
                    }
                ]
            }
        }
    )

    missing: set[str] = Field(
        default_factory=set,
        description="Packages in the old map that the new map lacks"
    )
    major_mismatch: set[str] = Field(
        default_factory=set,
        description="Shared packages whose major version changed"
    )
    changes: list[MajorVersionChange] = Field(
        default_factory=list,
        description="Version details for each major mismatch"
    )

    @property
    def has_regressions(self) -> bool:
        return bool(self.missing or self.major_mismatch)


class ComparisonReport(BaseModel):
    """Everything produced while comparing two dumps."""

    old_snapshot: BundleExportSnapshot
    new_snapshot: BundleExportSnapshot
    old_versions: ResolvedVersionMap
    new_versions: ResolvedVersionMap
    diff: DiffResult
