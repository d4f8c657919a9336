"""
Comparison Report Generator

Renders comparison results as plain text, optionally formatting the
regression lists as cyjdeps lookup commands.
"""

__version__ = "0.1.0"

from .models import CyJdepsTarget, ReportSection
from .sections import format_cyjdeps_command
from .service import build_report_sections, render_text_report

__all__ = [
    "__version__",
    "CyJdepsTarget",
    "ReportSection",
    "format_cyjdeps_command",
    "build_report_sections",
    "render_text_report",
]
