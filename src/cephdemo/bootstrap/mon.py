"""Monitor bootstrap."""

import logging

import aiofiles.os

from ..core.config import Settings, get_settings
from ..core.errors import MissingArtifactError
from ..tools.ceph import ADMIN_CAPS, MON_CAPS, CephTools
from .conf import ensure_cluster_conf

logger = logging.getLogger(__name__)


class MonitorBootstrap:
    """
    Creates (or rejoins) the single demo monitor.

    A monitor whose data dir already holds a keyring is started as-is. A new
    monitor gets the cluster config, admin and monitor keyrings and an
    initial monitor map first; the map is consumed by ``--mkfs`` and then
    deleted so it can never be injected twice.
    """

    def __init__(
        self,
        tools: CephTools,
        mon_ip: str,
        settings: Settings | None = None,
    ):
        self.tools = tools
        self.mon_ip = mon_ip
        self.settings = settings or get_settings()
        self.created = False

    @property
    def mon_addr(self) -> str:
        return f"{self.mon_ip}:{self.settings.mon_port}"

    async def get_mon_config(self) -> str:
        """
        Generate whatever part of the monitor config is missing.

        Returns:
            The cluster fsid
        """
        s = self.settings
        fsid = await ensure_cluster_conf(
            conf_path=s.conf_path,
            mon_name=s.mon_name,
            mon_ip=self.mon_ip,
            mon_port=s.mon_port,
            public_network=s.public_network,
            osd_max_object_size=s.osd_max_object_size,
        )

        if not s.admin_keyring.exists():
            await self.tools.create_keyring(
                s.admin_keyring, "client.admin", ADMIN_CAPS, secret=s.admin_secret
            )

        if not s.mon_keyring.exists():
            await self.tools.create_keyring(s.mon_keyring, "mon.", MON_CAPS)

        await self.tools.chown(s.mon_keyring, s.admin_keyring)

        if not s.monmap.exists():
            if s.legacy_monmap.exists():
                logger.info("Renaming %s to %s", s.legacy_monmap, s.monmap)
                await aiofiles.os.rename(s.legacy_monmap, s.monmap)
            else:
                await self.tools.create_monmap(s.monmap, s.mon_name, self.mon_addr, fsid)
            await self.tools.chown(s.monmap)

        return fsid

    async def _create(self) -> None:
        s = self.settings
        await aiofiles.os.makedirs(s.mon_data_dir, exist_ok=True)
        await self.tools.chown(
            s.mon_data_dir, owner=f"{s.mon_data_uid}:{s.mon_data_gid}"
        )
        await self.get_mon_config()

        if not s.mon_keyring.exists():
            raise MissingArtifactError(
                s.mon_keyring,
                "You can extract it from your current monitor by running "
                f"'ceph auth get mon. -o {s.mon_keyring}' or use a KV Store",
            )
        if not s.monmap.exists():
            raise MissingArtifactError(
                s.monmap,
                "You can extract it from your current monitor by running "
                f"'ceph mon getmap -o {s.monmap}' or use a KV Store",
            )

        # Missing keyrings mean this is the first monitor
        for keyring in (s.osd_bootstrap_keyring, s.admin_keyring):
            if keyring is not None and keyring.is_file():
                await self.tools.import_keyring(s.mon_keyring, keyring)

        await self.tools.mon_mkfs(s.mon_name, s.monmap, s.mon_keyring, s.mon_data_dir)

        # Later runs must rely on the monitor store, not on this single-mon map
        await aiofiles.os.remove(s.monmap)
        self.created = True

    async def run(self) -> None:
        """Bootstrap and start the monitor."""
        s = self.settings

        if not (s.mon_data_dir / "keyring").exists():
            await self._create()
        else:
            logger.info("Existing mon, trying to rejoin cluster...")

        await self.tools.start_mon(s.mon_name, s.mon_data_dir, self.mon_ip)

        if s.new_user_keyring:
            await self.tools.auth_import(s.new_user_keyring)

        await self.tools.chown(*sorted(s.etc_dir.iterdir()), verbose=True)
