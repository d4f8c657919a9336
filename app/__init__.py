"""manifest-diff application layer."""

__version__ = "0.1.0"
