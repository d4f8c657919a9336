"""
Pydantic models for comparison report rendering.
"""

from pydantic import BaseModel, Field


DEFAULT_CYJDEPS_SCRIPT = "find_package.py"


class CyJdepsTarget(BaseModel):
    """
    Where cyjdeps package lookups should run and write.

    When given, missing and mismatching package names are rendered as
    shell commands invoking the cyjdeps lookup script.
    """

    app_directory: str = Field(description="Directory of downloaded apps to scan")
    destination_file: str = Field(description="File the lookup output is appended to")
    script: str = Field(
        default=DEFAULT_CYJDEPS_SCRIPT,
        description="Lookup script run by the generated commands"
    )


class ReportSection(BaseModel):
    """A titled block of report lines."""

    title: str = Field(description="Section title")
    lines: list[str] = Field(default_factory=list, description="Section body")

    def render(self) -> str:
        underline = "-" * len(self.title)
        return "\n".join([self.title, underline, *self.lines])
