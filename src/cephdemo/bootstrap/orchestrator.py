"""Demo bootstrap - Sequences the pre-flight check and the daemon phases."""

import logging
import time
from typing import Awaitable, Callable, NoReturn

import aiofiles

from ..core.config import Settings, get_settings
from ..core.errors import BootstrapError
from ..core.network import discover_mon_ip
from ..tools.ceph import CephTools
from ..tools.runner import CommandRunner, SubprocessRunner
from .conf import parse_fsid
from .detect import detect_ceph_files
from .mgr import ManagerBootstrap
from .mon import MonitorBootstrap
from .osd import OSDBootstrap
from .report import BootstrapReport, PhaseReport, PhaseState, save_report

logger = logging.getLogger(__name__)

PHASES = ("preflight", "mon", "mgr", "osd")


class DemoBootstrap:
    """
    Single-node demo cluster bootstrap.

    Runs, in dependency order:
    - Pre-flight check for foreign Ceph state
    - Monitor bootstrap
    - Manager bootstrap
    - OSD bootstrap

    then marks the host as a demo and hands the process over to
    ``ceph -w``. Any failure aborts the whole sequence.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        runner: CommandRunner | None = None,
    ):
        self.settings = settings or get_settings()
        self.runner = runner or SubprocessRunner()
        self.tools = CephTools(runner=self.runner, settings=self.settings)
        self.report = BootstrapReport(
            cluster=self.settings.cluster,
            hostname=self.settings.hostname,
            phases=[PhaseReport(name) for name in PHASES],
        )

    def resolve_mon_ip(self) -> str:
        """Configured monitor address, or the host's first IPv4 address."""
        if self.settings.mon_ip:
            return self.settings.mon_ip
        return discover_mon_ip(self.settings.hostname)

    async def _preflight(self) -> None:
        phase = self.report.phase("preflight")
        phase.start()
        try:
            self.report.restart = detect_ceph_files(self.settings)
        except BootstrapError as e:
            phase.finish(PhaseState.FAILED, str(e))
            raise
        except OSError as e:
            phase.finish(PhaseState.FAILED, str(e))
            raise BootstrapError(str(e)) from e
        phase.finish(
            PhaseState.COMPLETED, "restart of a demo" if self.report.restart else "clean host"
        )

    async def _mon(self) -> None:
        mon_ip = self.resolve_mon_ip()
        self.report.mon_ip = mon_ip
        mon = MonitorBootstrap(self.tools, mon_ip, settings=self.settings)
        await mon.run()
        self.report.phase("mon").detail = "created" if mon.created else "rejoined"

    async def _mgr(self) -> None:
        await ManagerBootstrap(self.tools, settings=self.settings).run()

    async def _osd(self) -> None:
        osd = OSDBootstrap(self.tools, settings=self.settings)
        await osd.run()
        self.report.phase("osd").detail = (
            f"prepared {osd.prepared}, started {osd.started}"
        )

    async def _run_phase(
        self, name: str, step: Callable[[], Awaitable[None]]
    ) -> None:
        phase = self.report.phase(name)
        phase.start()
        logger.debug("Phase %s started", name)
        try:
            await step()
        except BootstrapError as e:
            phase.finish(PhaseState.FAILED, str(e))
            raise
        except OSError as e:
            phase.finish(PhaseState.FAILED, str(e))
            raise BootstrapError(str(e)) from e
        phase.finish(PhaseState.COMPLETED)

    async def _record_failure(self, error: Exception) -> None:
        for phase in self.report.phases:
            if phase.state == PhaseState.PENDING:
                phase.finish(PhaseState.SKIPPED)
        self.report.error = str(error)
        self.report.finished_at = time.time()
        await save_report(self.report, self.settings.report_path)

    async def _touch_markers(self) -> None:
        for marker in self.settings.demo_markers:
            async with aiofiles.open(marker, "a"):
                pass

    async def _read_fsid(self) -> str | None:
        conf = self.settings.conf_path
        if not conf.exists():
            return None
        async with aiofiles.open(conf, "r") as f:
            return parse_fsid(await f.read())

    async def run(self) -> BootstrapReport:
        """
        Bootstrap the demo cluster.

        Returns:
            BootstrapReport of the successful run

        Raises:
            BootstrapError: If any phase fails, filesystem errors included;
                the report is saved first unless the host failed the
                pre-flight check
        """
        await self._preflight()

        try:
            await self._run_phase("mon", self._mon)
            await self._run_phase("mgr", self._mgr)
            await self._run_phase("osd", self._osd)
            # Lets a later start tell its own files from foreign ones
            await self._touch_markers()
        except BootstrapError as e:
            await self._record_failure(e)
            raise
        except OSError as e:
            await self._record_failure(e)
            raise BootstrapError(str(e)) from e

        self.report.fsid = await self._read_fsid()
        self.report.succeeded = True
        self.report.finished_at = time.time()
        await save_report(self.report, self.settings.report_path)

        logger.info("SUCCESS")
        return self.report

    def watch(self) -> NoReturn:
        """
        Replace this process with ``ceph -w``.

        Raises:
            BootstrapError: If the ceph CLI cannot be executed
        """
        argv = self.tools.watch_command()
        try:
            self.runner.replace_process(argv)
        except OSError as e:
            raise BootstrapError(f"Cannot run {argv[0]} -w: {e}") from e
