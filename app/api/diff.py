"""
Diff endpoints for exported-package snapshots.

These endpoints parse two console dumps and report regressions.
No persistence - computation only.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field, ConfigDict

from app.config import settings
from src.diff_engine import compare_dumps
from src.snapshot_parser import DumpFormat, RowAnomaly, SnapshotParseError, split_dump_lines

logger = logging.getLogger(__name__)

router = APIRouter()


# --- Request/Response Models ---

class DumpInput(BaseModel):
    """One console dump and its layout."""

    content: str = Field(..., description="Full text of the dump")
    format: Optional[DumpFormat] = Field(
        default=None,
        description="Dump layout; detected from the first lines when omitted"
    )


class DiffRequest(BaseModel):
    """
    Request body for comparing two dumps.

    The old dump is the baseline; packages it exports that the new dump
    lacks, or whose major version changed, are reported.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "old": {
                    "format": "header_block",
                    "content": "Example API (51)\n----------------\n"
                               "Export-Package = com.example.api;version=\"1.5.0\"\n\n"
                },
                "new": {
                    "format": "tabular",
                    "content": "Package │ Version │ Optional │ Bundle\n"
                               "────────┼─────────┼──────────┼───────\n"
                               "com.example.api │ 2.0.0 │ │ Example API (77)\n"
                }
            }
        }
    )

    old: DumpInput = Field(..., description="Baseline dump")
    new: DumpInput = Field(..., description="Dump to check against the baseline")


class VersionChangeResponse(BaseModel):
    """A package whose major version changed."""

    package_name: str
    old_version: str
    new_version: str


class DiffResponse(BaseModel):
    """Regressions found between two dumps."""

    old_format: DumpFormat
    new_format: DumpFormat
    old_package_count: int = Field(description="Resolved packages in the old dump")
    new_package_count: int = Field(description="Resolved packages in the new dump")
    missing: list[str] = Field(description="Packages dropped by the new dump, sorted")
    major_mismatch: list[VersionChangeResponse] = Field(
        description="Shared packages whose major version changed, sorted"
    )
    old_anomalies: list[RowAnomaly] = Field(default_factory=list)
    new_anomalies: list[RowAnomaly] = Field(default_factory=list)
    has_regressions: bool


class DiffInfoResponse(BaseModel):
    """Supported layouts and exclusion defaults."""

    formats: list[DumpFormat]
    excluded_package_prefix: str
    unversioned_sentinel: str


# --- Endpoints ---

@router.get("/info", response_model=DiffInfoResponse)
async def get_diff_info() -> DiffInfoResponse:
    """Get supported dump layouts and the exclusion rule in use."""
    return DiffInfoResponse(
        formats=list(DumpFormat),
        excluded_package_prefix=settings.excluded_package_prefix,
        unversioned_sentinel=settings.unversioned_sentinel,
    )


@router.post(
    "",
    response_model=DiffResponse,
    summary="Compare two exported-package dumps",
    description="""
Parse two console dumps of exported packages and report regressions.

**Reported:**
- Packages exported by the old dump and missing from the new one
- Shared packages whose major version changed

**Notes:**
- Header-block dumps skip platform packages and unversioned exports
- Short table rows are returned as anomalies, not errors
- Malformed headers and versions fail with 422
""",
)
async def diff_dumps(request: DiffRequest) -> DiffResponse:
    """Compare two dumps and return missing packages and major changes."""
    logger.info(
        "Comparing dumps | old_format=%s new_format=%s",
        request.old.format,
        request.new.format,
    )

    try:
        report = compare_dumps(
            split_dump_lines(request.old.content),
            split_dump_lines(request.new.content),
            old_format=request.old.format,
            new_format=request.new.format,
            excluded_prefix=settings.excluded_package_prefix,
            unversioned_sentinel=settings.unversioned_sentinel,
        )
    except SnapshotParseError as e:
        logger.error("Parse error: %s", str(e))
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error": "parse_error",
                "message": e.message,
                "bundle": e.bundle,
                "package": e.package,
            },
        )
    except Exception as e:
        logger.exception("Comparison error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "comparison_error", "message": str(e)},
        )

    diff = report.diff
    logger.info(
        "Comparison complete | missing=%d major_mismatch=%d",
        len(diff.missing),
        len(diff.major_mismatch),
    )

    return DiffResponse(
        old_format=report.old_snapshot.format,
        new_format=report.new_snapshot.format,
        old_package_count=len(report.old_versions),
        new_package_count=len(report.new_versions),
        missing=sorted(diff.missing),
        major_mismatch=[
            VersionChangeResponse(
                package_name=c.package_name,
                old_version=str(c.old_version),
                new_version=str(c.new_version),
            )
            for c in diff.changes
        ],
        old_anomalies=report.old_snapshot.anomalies,
        new_anomalies=report.new_snapshot.anomalies,
        has_regressions=diff.has_regressions,
    )
