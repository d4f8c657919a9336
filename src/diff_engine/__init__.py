"""
Export Diff Engine

Compares the resolved package versions of two snapshots and reports
dropped packages and major version changes.
"""

__version__ = "0.1.0"

from .models import ComparisonReport, DiffResult, MajorVersionChange
from .engine import compare_dumps, compute_diff, find_major_changes, find_missing

__all__ = [
    "__version__",
    "ComparisonReport",
    "DiffResult",
    "MajorVersionChange",
    "compare_dumps",
    "compute_diff",
    "find_major_changes",
    "find_missing",
]
