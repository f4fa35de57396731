"""Manager bootstrap."""

import aiofiles.os

from ..core.config import Settings, get_settings
from ..tools.ceph import MGR_CAPS, CephTools


class ManagerBootstrap:
    """Fetches the manager key from the running monitor and starts ceph-mgr."""

    def __init__(self, tools: CephTools, settings: Settings | None = None):
        self.tools = tools
        self.settings = settings or get_settings()

    async def run(self) -> None:
        s = self.settings
        await aiofiles.os.makedirs(s.mgr_path, exist_ok=True)
        # get-or-create returns the existing key on restarts
        await self.tools.auth_get_or_create(
            f"mgr.{s.mgr_name}", MGR_CAPS, s.mgr_path / "keyring"
        )
        await self.tools.chown(s.mgr_path, recursive=True, verbose=True)
        await self.tools.start_mgr(s.mgr_name)
