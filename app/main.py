"""FastAPI application entry point."""

from fastapi import FastAPI

from app import __version__
from app.api import diff, health

app = FastAPI(
    title="manifest-diff",
    description="Exported-package regression checks between module system snapshots",
    version=__version__,
)

app.include_router(health.router, tags=["health"])
app.include_router(diff.router, prefix="/diff", tags=["diff"])
