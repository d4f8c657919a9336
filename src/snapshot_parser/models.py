"""
Pydantic models for exported-package snapshots.

Defines the version primitive, per-package exports, anomalies
recorded while scanning a dump, and the per-bundle snapshot.
"""

import re
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from .errors import VersionFormatError


_VERSION_PATTERN = re.compile(
    r"^(\d+)(?:\.(\d+)(?:\.(\d+)(?:\.([A-Za-z0-9_-]+))?)?)?$"
)


class DumpFormat(str, Enum):
    """Console dump layouts understood by the format adapters."""

    HEADER_BLOCK = "header_block"
    TABULAR = "tabular"


class Version(BaseModel):
    """
    Package version as (major, minor, micro, qualifier).

    Ordering compares (major, minor, micro) numerically; the qualifier
    is carried for display only.
    """

    model_config = ConfigDict(frozen=True)

    major: int = Field(default=0, ge=0, description="Major component")
    minor: int = Field(default=0, ge=0, description="Minor component")
    micro: int = Field(default=0, ge=0, description="Micro component")
    qualifier: Optional[str] = Field(
        default=None,
        description="Optional qualifier (e.g., 'SNAPSHOT', 'v20180105')"
    )

    @classmethod
    def parse(cls, text: str) -> "Version":
        """
        Parse a dotted version string.

        Missing minor/micro components default to 0.

        Args:
            text: Version text such as '1', '1.2', '1.2.3' or '1.2.3.beta'

        Returns:
            Parsed Version

        Raises:
            VersionFormatError: If the text is not a valid version
        """
        if text is None:
            raise VersionFormatError(str(text), "no version text")

        stripped = text.strip()
        if not stripped:
            raise VersionFormatError(text, "empty version")

        match = _VERSION_PATTERN.match(stripped)
        if match is None:
            raise VersionFormatError(
                text,
                "expected major[.minor[.micro[.qualifier]]]"
            )

        major, minor, micro, qualifier = match.groups()
        return cls(
            major=int(major),
            minor=int(minor or 0),
            micro=int(micro or 0),
            qualifier=qualifier,
        )

    @property
    def key(self) -> tuple[int, int, int]:
        """Components used for ordering."""
        return (self.major, self.minor, self.micro)

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.key < other.key

    def __le__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.key <= other.key

    def __gt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.key > other.key

    def __ge__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.key >= other.key

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.micro}"
        if self.qualifier:
            text += f".{self.qualifier}"
        return text


class PackageExport(BaseModel):
    """A single package exported by a bundle at a given version."""

    package_name: str = Field(description="Exported package name")
    version: Version = Field(description="Exported version")
    source_bundle: str = Field(description="Bundle declaring the export")


class RowAnomaly(BaseModel):
    """A dump row that was skipped because it could not be used."""

    line_number: int = Field(ge=1, description="1-based line number in the dump")
    raw_line: str = Field(description="Line as read from the dump")
    columns: list[str] = Field(
        default_factory=list,
        description="Trimmed columns the line was split into"
    )
    message: str = Field(description="Why the row was skipped")


class BundleExportSnapshot(BaseModel):
    """
    Exported packages of one dump, grouped by bundle.

    Bundles keep the order in which they first appear in the dump.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "format": "header_block",
                "bundles": {
                    "Apache Commons IO (45)": [
                        {
                            "package_name": "org.apache.commons.io",
                            "version": {"major": 2, "minor": 4, "micro": 0},
                            "source_bundle": "Apache Commons IO (45)"
                        }
                    ]
                },
                "anomalies": []
            }
        }
    )

    format: DumpFormat = Field(description="Layout the snapshot was read from")
    bundles: dict[str, list[PackageExport]] = Field(
        default_factory=dict,
        description="Bundle name -> exports in dump order"
    )
    anomalies: list[RowAnomaly] = Field(
        default_factory=list,
        description="Rows skipped while scanning the dump"
    )

    def add_bundle(self, bundle: str, exports: list[PackageExport]) -> None:
        """Register a bundle; repeated names accumulate their exports."""
        self.bundles.setdefault(bundle, []).extend(exports)

    def exports(self) -> list[PackageExport]:
        """All exports across bundles, in bundle then dump order."""
        return [e for bundle_exports in self.bundles.values() for e in bundle_exports]

    @property
    def bundle_count(self) -> int:
        return len(self.bundles)

    @property
    def export_count(self) -> int:
        return sum(len(v) for v in self.bundles.values())


class ExportClause(BaseModel):
    """
    One comma-separated clause of an Export-Package header.

    A clause may name several packages; all of them share the
    clause's attributes and directives.
    """

    packages: list[str] = Field(min_length=1, description="Package names")
    attributes: dict[str, str] = Field(
        default_factory=dict,
        description="Matching attributes (key=value), e.g. version"
    )
    directives: dict[str, str] = Field(
        default_factory=dict,
        description="Directives (key:=value), e.g. uses"
    )
