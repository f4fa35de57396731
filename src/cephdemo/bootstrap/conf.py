"""Cluster configuration file (``<cluster>.conf``)."""

import logging
import re
import uuid
from pathlib import Path

import aiofiles
import aiofiles.os

from ..core.errors import BootstrapError

logger = logging.getLogger(__name__)

GLOBAL_TEMPLATE = """\
[global]
fsid = {fsid}
mon initial members = {mon_name}
mon host = v2:{mon_ip}:{mon_port}/0
public network = {public_network}
cluster network = {public_network}
osd pool default size = 1
osd_crush_chooseleaf_type = {{0}}
osd_max_object_size = {osd_max_object_size}
"""

OSD_TEMPLATE = """
[osd.{osd_id}]
osd data = {osd_path}

"""

_FSID_RE = re.compile(r"^\s*fsid\s*=\s*(\S+)\s*$", re.MULTILINE)


def render_global_section(
    fsid: str,
    mon_name: str,
    mon_ip: str,
    mon_port: int,
    public_network: str,
    osd_max_object_size: int,
) -> str:
    """Render the ``[global]`` section of a single-monitor demo cluster."""
    return GLOBAL_TEMPLATE.format(
        fsid=fsid,
        mon_name=mon_name,
        mon_ip=mon_ip,
        mon_port=mon_port,
        public_network=public_network,
        osd_max_object_size=osd_max_object_size,
    )


def parse_fsid(text: str) -> str | None:
    """Return the fsid recorded in config text, if any."""
    match = _FSID_RE.search(text)
    return match.group(1) if match else None


async def ensure_cluster_conf(
    conf_path: Path,
    mon_name: str,
    mon_ip: str,
    mon_port: int,
    public_network: str,
    osd_max_object_size: int,
) -> str:
    """
    Create the cluster config unless it exists.

    Args:
        conf_path: Config file location
        mon_name: Name of the only initial monitor
        mon_ip: Monitor address
        mon_port: Monitor msgr2 port
        public_network: CIDR used for both the public and cluster networks
        osd_max_object_size: Largest RADOS object the OSDs accept

    Returns:
        The cluster fsid (newly generated, or read from the existing file)
    """
    if await aiofiles.os.path.exists(conf_path):
        async with aiofiles.open(conf_path, "r") as f:
            fsid = parse_fsid(await f.read())
        if fsid is None:
            raise BootstrapError(f"No fsid found in {conf_path}")
        logger.info("Using existing %s (fsid %s)", conf_path, fsid)
        return fsid

    fsid = str(uuid.uuid4())
    await aiofiles.os.makedirs(conf_path.parent, exist_ok=True)
    async with aiofiles.open(conf_path, "w") as f:
        await f.write(
            render_global_section(
                fsid=fsid,
                mon_name=mon_name,
                mon_ip=mon_ip,
                mon_port=mon_port,
                public_network=public_network,
                osd_max_object_size=osd_max_object_size,
            )
        )
    logger.info("Wrote %s (fsid %s)", conf_path, fsid)
    return fsid


async def ensure_osd_section(conf_path: Path, osd_id: int, osd_path: Path) -> bool:
    """
    Append an ``[osd.<id>]`` section pointing at ``osd_path``.

    Returns:
        True if the section was appended, False if the data path was
        already configured
    """
    async with aiofiles.open(conf_path, "r") as f:
        content = await f.read()

    if re.search(rf"osd data = {re.escape(str(osd_path))}", content):
        return False

    async with aiofiles.open(conf_path, "a") as f:
        await f.write(OSD_TEMPLATE.format(osd_id=osd_id, osd_path=osd_path))
    return True
