"""Pre-flight check for Ceph state left on the host."""

import logging
from pathlib import Path

from ..core.config import Settings
from ..core.errors import ExistingCephFilesError

logger = logging.getLogger(__name__)


def _files_at_depth(root: Path, depth: int) -> list[Path]:
    """Regular files exactly ``depth`` levels below ``root``."""
    if not root.is_dir():
        return []
    pattern = "/".join(["*"] * depth)
    return [p for p in root.glob(pattern) if p.is_file()]


def _files_below(root: Path) -> list[Path]:
    if not root.is_dir():
        return []
    return [p for p in root.rglob("*") if p.is_file()]


def detect_ceph_files(settings: Settings) -> bool:
    """
    Refuse to bootstrap over Ceph files this demo did not create.

    A demo marker in either directory means the container is restarting
    over its own state. Otherwise any daemon file (three levels below the
    lib dir, e.g. ``mon/ceph-host/keyring``) or more than one file in the
    config dir counts as foreign state; a lone ``rbdmap`` is tolerated.

    Returns:
        True if this is a restart of an earlier demo, False for a clean host

    Raises:
        ExistingCephFilesError: If foreign Ceph files are present
    """
    if any(marker.is_file() for marker in settings.demo_markers):
        logger.info("Found residual files of a demo container.")
        logger.info("This looks like a restart, processing.")
        return True

    lib_dir, etc_dir = settings.lib_dir, settings.etc_dir
    if not (lib_dir.is_dir() or etc_dir.is_dir()):
        return False

    if _files_at_depth(lib_dir, 3) or len(_files_below(etc_dir)) > 1:
        message = "I can see existing Ceph files, please remove them!"
        logger.error(message)
        logger.error(
            "To run the demo container, remove the content of %s/ and %s/",
            lib_dir,
            etc_dir,
        )
        logger.error("Before doing this, make sure you are removing any sensitive data.")
        raise ExistingCephFilesError(message)

    return False
