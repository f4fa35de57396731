"""API routes."""

from .artifacts import router as artifacts_router
from .bootstrap import router as bootstrap_router

__all__ = [
    "artifacts_router",
    "bootstrap_router",
]
