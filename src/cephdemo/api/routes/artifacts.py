"""Artifact API routes."""

from fastapi import APIRouter, HTTPException, status

from ...core.artifacts import Artifact, collect_artifacts
from ...core.config import get_settings
from ..schemas.status import ArtifactListResponse, ArtifactResponse

router = APIRouter(prefix="/artifacts", tags=["artifacts"])


def artifact_to_response(artifact: Artifact) -> ArtifactResponse:
    """Convert Artifact to API response."""
    return ArtifactResponse(
        name=artifact.name,
        kind=artifact.kind.value,
        path=str(artifact.path),
        exists=artifact.exists,
    )


@router.get("", response_model=ArtifactListResponse)
async def list_artifacts():
    """List every demo artifact with its existence flag."""
    artifacts = [artifact_to_response(a) for a in collect_artifacts(get_settings())]

    return ArtifactListResponse(
        artifacts=artifacts,
        total=len(artifacts),
        present=sum(1 for a in artifacts if a.exists),
    )


@router.get("/{name}", response_model=ArtifactResponse)
async def get_artifact(name: str):
    """Get a single artifact by name."""
    for artifact in collect_artifacts(get_settings()):
        if artifact.name == name:
            return artifact_to_response(artifact)

    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Artifact {name} not found",
    )
