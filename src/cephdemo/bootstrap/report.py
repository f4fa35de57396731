"""Bootstrap progress report, persisted next to the daemon data."""

import json
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import aiofiles
import aiofiles.os


class PhaseState(Enum):
    """State of a bootstrap phase."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class PhaseReport:
    """Record of one bootstrap phase."""

    name: str
    state: PhaseState = PhaseState.PENDING
    started_at: float | None = None
    duration_ms: float | None = None
    detail: str = ""

    def start(self) -> None:
        self.state = PhaseState.RUNNING
        self.started_at = time.time()

    def finish(self, state: PhaseState, detail: str = "") -> None:
        self.state = state
        if self.started_at is not None:
            self.duration_ms = (time.time() - self.started_at) * 1000
        if detail:
            self.detail = detail


@dataclass
class BootstrapReport:
    """Outcome of a bootstrap run."""

    cluster: str
    hostname: str
    phases: list[PhaseReport] = field(default_factory=list)
    restart: bool = False
    fsid: str | None = None
    mon_ip: str | None = None
    succeeded: bool = False
    error: str | None = None
    finished_at: float | None = None

    def phase(self, name: str) -> PhaseReport:
        """Get a phase by name."""
        for phase in self.phases:
            if phase.name == name:
                return phase
        raise KeyError(f"Unknown phase: {name}")

    def to_dict(self) -> dict:
        return {
            "cluster": self.cluster,
            "hostname": self.hostname,
            "restart": self.restart,
            "fsid": self.fsid,
            "mon_ip": self.mon_ip,
            "succeeded": self.succeeded,
            "error": self.error,
            "finished_at": self.finished_at,
            "phases": [
                {
                    "name": p.name,
                    "state": p.state.value,
                    "started_at": p.started_at,
                    "duration_ms": p.duration_ms,
                    "detail": p.detail,
                }
                for p in self.phases
            ],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BootstrapReport":
        phases = [
            PhaseReport(
                name=p["name"],
                state=PhaseState(p["state"]),
                started_at=p.get("started_at"),
                duration_ms=p.get("duration_ms"),
                detail=p.get("detail", ""),
            )
            for p in data.get("phases", [])
        ]
        return cls(
            cluster=data["cluster"],
            hostname=data["hostname"],
            phases=phases,
            restart=data.get("restart", False),
            fsid=data.get("fsid"),
            mon_ip=data.get("mon_ip"),
            succeeded=data.get("succeeded", False),
            error=data.get("error"),
            finished_at=data.get("finished_at"),
        )


async def save_report(report: BootstrapReport, path: Path) -> None:
    """Write the report as JSON."""
    await aiofiles.os.makedirs(path.parent, exist_ok=True)
    async with aiofiles.open(path, "w") as f:
        await f.write(json.dumps(report.to_dict(), indent=2))


async def load_report(path: Path) -> BootstrapReport | None:
    """Read a saved report; None if there is none or it is unreadable."""
    if not await aiofiles.os.path.exists(path):
        return None

    try:
        async with aiofiles.open(path, "r") as f:
            return BootstrapReport.from_dict(json.loads(await f.read()))
    except (json.JSONDecodeError, KeyError, ValueError, TypeError, AttributeError):
        return None
