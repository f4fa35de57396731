"""Inventory of the on-disk artifacts a demo bootstrap produces."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .config import Settings


class ArtifactKind(Enum):
    """Kind of bootstrap artifact."""

    CONFIG = "config"
    KEYRING = "keyring"
    MONMAP = "monmap"
    DATA_DIR = "data_dir"
    MARKER = "marker"
    REPORT = "report"


@dataclass
class Artifact:
    """A bootstrap artifact and whether it exists right now."""

    name: str
    kind: ArtifactKind
    path: Path
    exists: bool


def _artifact(name: str, kind: ArtifactKind, path: Path) -> Artifact:
    return Artifact(name=name, kind=kind, path=path, exists=path.exists())


def collect_artifacts(settings: Settings) -> list[Artifact]:
    """
    List every artifact of the demo cluster in bootstrap order.

    The monitor map is expected to be missing once the monitor store has
    been created.
    """
    s = settings
    artifacts = [
        _artifact("cluster_conf", ArtifactKind.CONFIG, s.conf_path),
        _artifact("admin_keyring", ArtifactKind.KEYRING, s.admin_keyring),
        _artifact("mon_keyring", ArtifactKind.KEYRING, s.mon_keyring),
        _artifact("monmap", ArtifactKind.MONMAP, s.monmap),
        _artifact("mon_data", ArtifactKind.DATA_DIR, s.mon_data_dir),
        _artifact("mon_data_keyring", ArtifactKind.KEYRING, s.mon_data_dir / "keyring"),
        _artifact("mgr_keyring", ArtifactKind.KEYRING, s.mgr_path / "keyring"),
    ]

    for osd_id in range(s.osd_count):
        osd_path = s.osd_path(osd_id)
        artifacts.append(_artifact(f"osd.{osd_id}_data", ArtifactKind.DATA_DIR, osd_path))
        artifacts.append(
            _artifact(f"osd.{osd_id}_keyring", ArtifactKind.KEYRING, osd_path / "keyring")
        )

    etc_marker, lib_marker = s.demo_markers
    artifacts.append(_artifact("etc_marker", ArtifactKind.MARKER, etc_marker))
    artifacts.append(_artifact("lib_marker", ArtifactKind.MARKER, lib_marker))
    artifacts.append(_artifact("bootstrap_report", ArtifactKind.REPORT, s.report_path))

    return artifacts
