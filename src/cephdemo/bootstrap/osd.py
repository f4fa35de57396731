"""Object storage daemon bootstrap."""

import logging
from pathlib import Path

import aiofiles.os

from ..core.config import Settings, get_settings
from ..tools.ceph import OSD_CAPS, CephTools
from .conf import ensure_osd_section

logger = logging.getLogger(__name__)


class OSDBootstrap:
    """
    Prepares and starts the demo OSDs.

    OSDs are handled one after another. With ``OSD_DEVICE`` set the OSD is
    deployed on that device through ceph-volume; otherwise it is a plain
    directory OSD created with ``ceph-osd --mkfs``.
    """

    def __init__(self, tools: CephTools, settings: Settings | None = None):
        self.tools = tools
        self.settings = settings or get_settings()
        self.prepared: list[int] = []
        self.started: list[int] = []

    def osd_ids(self) -> range:
        return range(self.settings.osd_count)

    async def prepare(self, osd_id: int, osd_path: Path) -> None:
        """Create the data dir and key of a new OSD."""
        s = self.settings
        await ensure_osd_section(s.conf_path, osd_id, osd_path)
        await aiofiles.os.makedirs(osd_path, exist_ok=True)
        await self.tools.chown(osd_path, recursive=True, verbose=True)

        if s.osd_device:
            await self.tools.volume_prepare(s.osd_device)
        else:
            logger.info("Bootstrapping OSD...")
            await self.tools.auth_get_or_create(
                f"osd.{osd_id}", OSD_CAPS, osd_path / "keyring"
            )
            await self.tools.osd_mkfs(osd_id, osd_path)

        self.prepared.append(osd_id)

    async def activate(self, osd_id: int) -> None:
        """Mount a ceph-volume OSD without handing it to systemd."""
        osd_fsid = await self.tools.volume_osd_fsid(osd_id)
        await self.tools.volume_activate(osd_id, osd_fsid)

    async def run(self) -> None:
        s = self.settings
        for osd_id in self.osd_ids():
            osd_path = s.osd_path(osd_id)

            if not (osd_path / "keyring").exists():
                await self.prepare(osd_id, osd_path)

            if s.osd_device:
                await self.activate(osd_id)

            logger.info("Starting OSD...")
            await self.tools.chown(osd_path, recursive=True, verbose=True)
            await self.tools.start_osd(osd_id)
            self.started.append(osd_id)
