"""Demo cluster bootstrap phases."""

from .detect import detect_ceph_files
from .mgr import ManagerBootstrap
from .mon import MonitorBootstrap
from .orchestrator import DemoBootstrap
from .osd import OSDBootstrap
from .report import BootstrapReport, PhaseReport, PhaseState

__all__ = [
    "DemoBootstrap",
    "MonitorBootstrap",
    "ManagerBootstrap",
    "OSDBootstrap",
    "detect_ceph_files",
    "BootstrapReport",
    "PhaseReport",
    "PhaseState",
]
