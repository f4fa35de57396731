"""Command-line contracts of the Ceph tools the bootstrap drives."""

import json
from pathlib import Path

from ..core.config import Settings, get_settings
from ..core.errors import CommandError
from .runner import CommandRunner, SubprocessRunner

# Capabilities granted to each entity created during bootstrap
ADMIN_CAPS = {"mon": "allow *", "osd": "allow *", "mds": "allow *", "mgr": "allow *"}
MON_CAPS = {"mon": "allow *"}
MGR_CAPS = {"mon": "allow profile mgr", "mds": "allow *", "osd": "allow *"}
OSD_CAPS = {"mon": "allow profile osd", "osd": "allow *", "mgr": "allow profile osd"}


def _authtool_caps(caps: dict[str, str]) -> list[str]:
    args = []
    for subsystem, cap in caps.items():
        args.extend(["--cap", subsystem, cap])
    return args


def _auth_caps(caps: dict[str, str]) -> list[str]:
    args = []
    for subsystem, cap in caps.items():
        args.extend([subsystem, cap])
    return args


class CephTools:
    """
    Thin wrappers around the Ceph binaries.

    Each method builds one command line and hands it to the runner; the
    binaries do all of the real work.
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        settings: Settings | None = None,
    ):
        self.runner = runner or SubprocessRunner()
        self.settings = settings or get_settings()

    # ceph-authtool

    async def create_keyring(
        self,
        keyring: Path,
        entity: str,
        caps: dict[str, str],
        secret: str | None = None,
    ) -> None:
        """
        Create a keyring holding one entity.

        Args:
            keyring: Keyring file to create
            entity: Entity name (e.g. 'client.admin', 'mon.')
            caps: Capabilities per subsystem
            secret: Key to store; a new key is generated when omitted
        """
        key_args = [f"--add-key={secret}"] if secret else ["--gen-key"]
        await self.runner.run(
            ["ceph-authtool", str(keyring), "--create-keyring", "-n", entity]
            + key_args
            + _authtool_caps(caps)
        )

    async def import_keyring(self, keyring: Path, source: Path) -> None:
        """Import every entity of ``source`` into ``keyring``."""
        await self.runner.run(
            ["ceph-authtool", str(keyring), "--import-keyring", str(source)]
        )

    # monmaptool

    async def create_monmap(
        self, monmap: Path, mon_name: str, mon_addr: str, fsid: str
    ) -> None:
        """Create an initial monitor map listing a single monitor."""
        await self.runner.run(
            [
                "monmaptool", "--create",
                "--add", mon_name, mon_addr,
                "--fsid", fsid,
                str(monmap),
            ]
        )

    # Daemons

    async def mon_mkfs(
        self, mon_name: str, monmap: Path, keyring: Path, mon_data: Path
    ) -> None:
        """Prepare a monitor store from a monitor map and keyring."""
        s = self.settings
        await self.runner.run(
            [
                "ceph-mon",
                "--setuser", s.ceph_user,
                "--setgroup", s.ceph_group,
                "--cluster", s.cluster,
                "--mkfs",
                "-i", mon_name,
                "--inject-monmap", str(monmap),
                "--keyring", str(keyring),
                "--mon-data", str(mon_data),
            ]
        )

    async def start_mon(self, mon_name: str, mon_data: Path, public_addr: str) -> None:
        await self.runner.run(
            ["ceph-mon"]
            + self.settings.daemon_opts
            + ["-i", mon_name, "--mon-data", str(mon_data), "--public-addr", public_addr]
        )

    async def start_mgr(self, mgr_name: str) -> None:
        await self.runner.run(["ceph-mgr"] + self.settings.daemon_opts + ["-i", mgr_name])

    async def osd_mkfs(self, osd_id: int, osd_data: Path) -> None:
        await self.runner.run(
            [
                "ceph-osd",
                "--conf", str(self.settings.conf_path),
                "--osd-data", str(osd_data),
                "--mkfs",
                "-i", str(osd_id),
            ]
        )

    async def start_osd(self, osd_id: int) -> None:
        await self.runner.run(["ceph-osd"] + self.settings.daemon_opts + ["-i", str(osd_id)])

    # ceph (cluster admin CLI)

    async def auth_get_or_create(
        self, entity: str, caps: dict[str, str], output: Path
    ) -> None:
        """Fetch or create ``entity`` in the cluster and write its keyring."""
        await self.runner.run(
            ["ceph"]
            + self.settings.cli_opts
            + ["auth", "get-or-create", entity]
            + _auth_caps(caps)
            + ["-o", str(output)]
        )

    async def auth_import(self, keyring_text: str) -> None:
        """Import keyring text into the cluster's auth database."""
        await self.runner.run(
            ["ceph"] + self.settings.cli_opts + ["auth", "import", "-i", "-"],
            input=keyring_text,
        )

    def watch_command(self) -> list[str]:
        return ["ceph"] + self.settings.cli_opts + ["-w"]

    # ceph-volume

    async def volume_prepare(self, device: str) -> None:
        await self.runner.run(["ceph-volume", "lvm", "prepare", "--data", device])

    async def volume_osd_fsid(self, osd_id: int) -> str:
        """
        Look up the fsid of a prepared OSD.

        Raises:
            CommandError: If ceph-volume does not report the OSD
        """
        argv = ["ceph-volume", "lvm", "list", "--format", "json"]
        result = await self.runner.run(argv, capture=True)

        try:
            listing = json.loads(result.stdout)
            return listing[str(osd_id)][0]["tags"]["ceph.osd_fsid"]
        except (json.JSONDecodeError, KeyError, IndexError, TypeError) as e:
            raise CommandError(
                argv, result.returncode, f"no ceph.osd_fsid reported for osd.{osd_id}"
            ) from e

    async def volume_activate(self, osd_id: int, osd_fsid: str) -> None:
        await self.runner.run(
            [
                "ceph-volume", "lvm", "activate",
                "--no-systemd", "--bluestore",
                str(osd_id), osd_fsid,
            ]
        )

    # Ownership

    async def chown(
        self,
        *paths: Path,
        owner: str | None = None,
        recursive: bool = False,
        verbose: bool = False,
    ) -> None:
        """Hand ``paths`` to ``owner`` (the ceph user by default)."""
        if not paths:
            return
        argv = ["chown"]
        if verbose:
            argv.append("--verbose")
        if recursive:
            argv.append("-R")
        argv.append(owner or self.settings.owner)
        argv.extend(str(p) for p in paths)
        await self.runner.run(argv)
