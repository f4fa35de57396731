"""Shared fixtures: isolated settings and a fake Ceph toolchain."""

import json
from pathlib import Path

import pytest

from cephdemo.core.config import Settings, get_settings
from cephdemo.core.errors import CommandError
from cephdemo.tools.runner import CommandResult, CommandRunner


class ProcessReplaced(Exception):
    """Raised by the fake runner where a real one would exec."""

    def __init__(self, argv: list[str]):
        self.argv = argv
        super().__init__(" ".join(argv))


def _value_after(argv: list[str], flag: str) -> str:
    return argv[argv.index(flag) + 1]


class FakeRunner(CommandRunner):
    """
    Records commands and fakes the files the Ceph tools would write.

    ``fail`` maps a command prefix (e.g. ``("ceph-mgr",)``) to the exit code
    it should fail with.
    """

    def __init__(self, osd_fsids: dict[int, str] | None = None):
        self.calls: list[list[str]] = []
        self.inputs: list[str | None] = []
        self.fail: dict[tuple[str, ...], int] = {}
        self.osd_fsids = osd_fsids or {}
        self.replaced: list[str] | None = None

    def commands(self, program: str) -> list[list[str]]:
        return [c for c in self.calls if c[0] == program]

    def called(self, *prefix: str) -> bool:
        return any(tuple(c[: len(prefix)]) == prefix for c in self.calls)

    async def run(self, argv, input=None, capture=False) -> CommandResult:
        argv = list(argv)
        self.calls.append(argv)
        self.inputs.append(input)

        for prefix, code in self.fail.items():
            if tuple(argv[: len(prefix)]) == prefix:
                raise CommandError(argv, code, "simulated failure")

        stdout = self._simulate(argv)
        return CommandResult(argv=argv, returncode=0, stdout=stdout)

    def _simulate(self, argv: list[str]) -> str:
        program = argv[0]

        if program == "ceph-authtool" and "--create-keyring" in argv:
            entity = _value_after(argv, "-n")
            Path(argv[1]).write_text(f"[{entity}]\n\tkey = AQDfakekey==\n")
        elif program == "monmaptool":
            Path(argv[-1]).write_bytes(b"\x00monmap")
        elif program == "ceph-mon" and "--mkfs" in argv:
            mon_data = Path(_value_after(argv, "--mon-data"))
            mon_data.mkdir(parents=True, exist_ok=True)
            (mon_data / "keyring").write_text("[mon.]\n\tkey = AQDfakekey==\n")
        elif program == "ceph" and "get-or-create" in argv:
            entity = argv[argv.index("get-or-create") + 1]
            Path(_value_after(argv, "-o")).write_text(f"[{entity}]\n\tkey = AQDfakekey==\n")
        elif program == "ceph-osd" and "--mkfs" in argv:
            Path(_value_after(argv, "--osd-data"), "fsid").write_text("fake-osd-fsid\n")
        elif program == "ceph-volume" and argv[1:3] == ["lvm", "list"]:
            return json.dumps(
                {
                    str(osd_id): [{"tags": {"ceph.osd_fsid": fsid}}]
                    for osd_id, fsid in self.osd_fsids.items()
                }
            )
        return ""

    def replace_process(self, argv):
        self.replaced = list(argv)
        raise ProcessReplaced(argv)


@pytest.fixture
def runner():
    """Create a fake command runner."""
    return FakeRunner()


@pytest.fixture
def settings(tmp_path):
    """Settings rooted in a temporary directory."""
    return Settings(
        etc_dir=tmp_path / "etc" / "ceph",
        lib_dir=tmp_path / "var" / "lib" / "ceph",
        hostname="demo",
        mon_ip="192.0.2.10",
        public_network="192.0.2.0/24",
    )


@pytest.fixture
def env_settings(tmp_path, monkeypatch):
    """Point the cached global settings at a temporary directory."""
    monkeypatch.setenv("CEPH_DEMO_ETC_DIR", str(tmp_path / "etc" / "ceph"))
    monkeypatch.setenv("CEPH_DEMO_LIB_DIR", str(tmp_path / "var" / "lib" / "ceph"))
    monkeypatch.setenv("CEPH_DEMO_HOSTNAME", "demo")
    monkeypatch.setenv("MON_IP", "192.0.2.10")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()
