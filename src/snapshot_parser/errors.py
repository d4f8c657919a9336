"""
Exceptions raised while turning a console dump into a snapshot.

All of them derive from ValueError so callers can treat any malformed
input the same way.
"""

from typing import Optional


class VersionFormatError(ValueError):
    """Version text does not follow major[.minor[.micro[.qualifier]]]."""

    def __init__(self, text: str, reason: str):
        self.text = text
        self.reason = reason
        super().__init__(f"Invalid version {text!r}: {reason}")


class SnapshotParseError(ValueError):
    """
    A dump could not be converted into a snapshot.

    Names the bundle (and package, when known) the failure belongs to.
    """

    def __init__(
        self,
        message: str,
        bundle: Optional[str] = None,
        package: Optional[str] = None,
    ):
        self.message = message
        self.bundle = bundle
        self.package = package
        super().__init__(self._describe())

    def _describe(self) -> str:
        context = []
        if self.bundle is not None:
            context.append(f"bundle={self.bundle!r}")
        if self.package is not None:
            context.append(f"package={self.package!r}")
        if not context:
            return self.message
        return f"{self.message} ({', '.join(context)})"


class ManifestHeaderError(SnapshotParseError):
    """Header syntax inside a manifest block is malformed."""
