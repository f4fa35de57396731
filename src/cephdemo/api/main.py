"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from .. import __version__
from ..bootstrap.report import load_report
from ..core.config import get_settings
from .routes import artifacts_router, bootstrap_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings = get_settings()
    logger.info(
        "Serving status of cluster %s on %s:%s",
        settings.cluster,
        settings.api_host,
        settings.api_port,
    )
    yield


app = FastAPI(
    title="cephdemo status API",
    description="""
    Read-only view of a single-node Ceph demo bootstrap:
    - **Artifacts**: config, keyrings, monitor map and daemon directories
    - **Bootstrap**: phases of the last recorded run
    """,
    version=__version__,
    lifespan=lifespan,
)

app.include_router(artifacts_router, prefix="/api/v1")
app.include_router(bootstrap_router, prefix="/api/v1")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "cephdemo status API",
        "version": __version__,
        "cluster": get_settings().cluster,
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    report = await load_report(get_settings().report_path)

    if report is None:
        state = "not_bootstrapped"
    elif report.succeeded:
        state = "healthy"
    else:
        state = "failed"

    return {
        "status": state,
        "bootstrapped": report is not None and report.succeeded,
    }


def run(host: str | None = None, port: int | None = None) -> None:
    """Run the API server."""
    settings = get_settings()
    uvicorn.run(
        "cephdemo.api.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
