"""Status API schemas."""

from pydantic import BaseModel


class ArtifactResponse(BaseModel):
    """A bootstrap artifact."""

    name: str
    kind: str
    path: str
    exists: bool


class ArtifactListResponse(BaseModel):
    """List of artifacts response."""

    artifacts: list[ArtifactResponse]
    total: int
    present: int


class PhaseResponse(BaseModel):
    """State of one bootstrap phase."""

    name: str
    state: str
    started_at: float | None = None
    duration_ms: float | None = None
    detail: str = ""


class BootstrapResponse(BaseModel):
    """Last recorded bootstrap run."""

    cluster: str
    hostname: str
    restart: bool
    fsid: str | None = None
    mon_ip: str | None = None
    succeeded: bool
    error: str | None = None
    finished_at: float | None = None
    phases: list[PhaseResponse]
