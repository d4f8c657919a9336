"""
Package Version Resolver

Merges the exports of every bundle in a snapshot into a single
package -> version map, letting the highest exported version win.
"""

__version__ = "0.1.0"

from .models import ResolvedVersionMap, ShadowedExport
from .resolver import fold_export, outranks, resolve_exports, resolve_versions

__all__ = [
    "__version__",
    "ResolvedVersionMap",
    "ShadowedExport",
    "fold_export",
    "outranks",
    "resolve_exports",
    "resolve_versions",
]
