"""
Pydantic models for resolved package versions.
"""

from pydantic import BaseModel, Field

from src.snapshot_parser.models import Version


class ShadowedExport(BaseModel):
    """An export displaced by a higher version of the same package."""

    package_name: str = Field(description="Package exported more than once")
    shadowed_version: Version = Field(description="Version that was displaced")
    shadowed_bundle: str = Field(description="Bundle of the displaced export")
    winning_version: Version = Field(description="Version that replaced it")
    winning_bundle: str = Field(description="Bundle of the replacing export")


class ResolvedVersionMap(BaseModel):
    """
    Package name -> highest exported version across all bundles.

    Invariant: versions[p] is the maximum version among all exports of p.
    """

    versions: dict[str, Version] = Field(
        default_factory=dict,
        description="Resolved version per package"
    )
    providers: dict[str, str] = Field(
        default_factory=dict,
        description="Bundle supplying the resolved version per package"
    )
    shadowed: list[ShadowedExport] = Field(
        default_factory=list,
        description="Exports replaced by a higher version, in resolution order"
    )

    def __contains__(self, package_name: str) -> bool:
        return package_name in self.versions

    def __len__(self) -> int:
        return len(self.versions)

    def package_names(self) -> set[str]:
        return set(self.versions)

    def shadowed_by_bundle(self, bundle: str) -> list[ShadowedExport]:
        """Shadowing records whose winning export came from a bundle."""
        return [s for s in self.shadowed if s.winning_bundle == bundle]
