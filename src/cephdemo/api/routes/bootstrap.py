"""Bootstrap report API routes."""

from fastapi import APIRouter, HTTPException, status

from ...bootstrap.report import BootstrapReport, load_report
from ...core.config import get_settings
from ..schemas.status import BootstrapResponse, PhaseResponse

router = APIRouter(prefix="/bootstrap", tags=["bootstrap"])


def report_to_response(report: BootstrapReport) -> BootstrapResponse:
    """Convert BootstrapReport to API response."""
    return BootstrapResponse(
        cluster=report.cluster,
        hostname=report.hostname,
        restart=report.restart,
        fsid=report.fsid,
        mon_ip=report.mon_ip,
        succeeded=report.succeeded,
        error=report.error,
        finished_at=report.finished_at,
        phases=[
            PhaseResponse(
                name=p.name,
                state=p.state.value,
                started_at=p.started_at,
                duration_ms=p.duration_ms,
                detail=p.detail,
            )
            for p in report.phases
        ],
    )


async def _require_report() -> BootstrapReport:
    report = await load_report(get_settings().report_path)
    if report is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No bootstrap has been recorded on this host",
        )
    return report


@router.get("", response_model=BootstrapResponse)
async def get_bootstrap():
    """Get the last recorded bootstrap run."""
    return report_to_response(await _require_report())


@router.get("/phases/{name}", response_model=PhaseResponse)
async def get_phase(name: str):
    """Get one phase of the last bootstrap run."""
    report = await _require_report()

    try:
        phase = report.phase(name)
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Phase {name} not found",
        )

    return PhaseResponse(
        name=phase.name,
        state=phase.state.value,
        started_at=phase.started_at,
        duration_ms=phase.duration_ms,
        detail=phase.detail,
    )
