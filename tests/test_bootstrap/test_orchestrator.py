"""Tests for the full demo bootstrap sequence."""

import json

import pytest
from conftest import ProcessReplaced

from cephdemo.bootstrap.orchestrator import DemoBootstrap
from cephdemo.bootstrap.report import PhaseState, load_report
from cephdemo.core.errors import BootstrapError, CommandError, ExistingCephFilesError


@pytest.fixture
def bootstrap(runner, settings):
    """Create a demo bootstrap driving the fake runner."""
    return DemoBootstrap(settings=settings, runner=runner)


def _first_index(runner, program: str) -> int:
    return next(i for i, c in enumerate(runner.calls) if c[0] == program)


class TestDemoBootstrap:
    """End-to-end bootstrap tests."""

    @pytest.mark.asyncio
    async def test_clean_host(self, bootstrap, runner, settings):
        """Test a clean host ends with markers and a successful report."""
        report = await bootstrap.run()

        assert report.succeeded is True
        assert report.restart is False
        assert report.mon_ip == "192.0.2.10"
        assert report.fsid is not None
        assert all(p.state == PhaseState.COMPLETED for p in report.phases)
        assert report.phase("mon").detail == "created"
        for marker in settings.demo_markers:
            assert marker.exists()

    @pytest.mark.asyncio
    async def test_phase_order(self, bootstrap, runner):
        """Test mon starts before mgr, and mgr before the OSDs."""
        await bootstrap.run()

        mon_start = next(
            i for i, c in enumerate(runner.calls) if c[0] == "ceph-mon" and "--public-addr" in c
        )
        assert mon_start < _first_index(runner, "ceph-mgr") < _first_index(runner, "ceph-osd")

    @pytest.mark.asyncio
    async def test_report_saved(self, bootstrap, settings):
        """Test the report is written as JSON."""
        await bootstrap.run()

        data = json.loads(settings.report_path.read_text())
        assert data["succeeded"] is True
        assert [p["name"] for p in data["phases"]] == ["preflight", "mon", "mgr", "osd"]

        loaded = await load_report(settings.report_path)
        assert loaded.fsid == data["fsid"]

    @pytest.mark.asyncio
    async def test_restart_reuses_state(self, runner, settings):
        """Test a second container start is a restart that regenerates nothing."""
        await DemoBootstrap(settings=settings, runner=runner).run()
        runner.calls.clear()

        report = await DemoBootstrap(settings=settings, runner=runner).run()

        assert report.restart is True
        assert report.phase("mon").detail == "rejoined"
        assert not runner.commands("ceph-authtool")
        assert not runner.commands("monmaptool")
        assert not any("--mkfs" in c for c in runner.calls)

    @pytest.mark.asyncio
    async def test_foreign_state_aborts(self, bootstrap, runner, settings):
        """Test foreign Ceph files abort before any command runs."""
        settings.etc_dir.mkdir(parents=True)
        (settings.etc_dir / "rbdmap").write_text("")
        (settings.etc_dir / "ceph.conf").write_text("[global]\n")

        with pytest.raises(ExistingCephFilesError):
            await bootstrap.run()

        assert runner.calls == []
        assert bootstrap.report.phase("preflight").state == PhaseState.FAILED
        assert not settings.report_path.exists()

    @pytest.mark.asyncio
    async def test_failed_phase_recorded(self, bootstrap, runner, settings):
        """Test a failing phase is saved as failed and later ones skipped."""
        runner.fail[("ceph-mgr",)] = 1

        with pytest.raises(CommandError):
            await bootstrap.run()

        report = await load_report(settings.report_path)
        assert report.succeeded is False
        assert "ceph-mgr" in report.error
        assert report.phase("mon").state == PhaseState.COMPLETED
        assert report.phase("mgr").state == PhaseState.FAILED
        assert report.phase("osd").state == PhaseState.SKIPPED
        assert not runner.commands("ceph-osd")
        for marker in settings.demo_markers:
            assert not marker.exists()

    def test_watch_replaces_process(self, bootstrap, runner):
        """Test the watch step execs 'ceph -w'."""
        with pytest.raises(ProcessReplaced):
            bootstrap.watch()

        assert runner.replaced == ["ceph", "--cluster", "ceph", "-w"]

    def test_watch_without_ceph_cli(self, bootstrap, runner, monkeypatch):
        """Test a ceph CLI that cannot be executed becomes a BootstrapError."""

        def missing(argv):
            raise FileNotFoundError(2, "No such file or directory", argv[0])

        monkeypatch.setattr(runner, "replace_process", missing)

        with pytest.raises(BootstrapError) as exc_info:
            bootstrap.watch()

        assert exc_info.value.exit_code == 1
        assert "ceph" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_filesystem_error_recorded(self, bootstrap, settings):
        """Test a filesystem error fails its phase and still saves the report."""
        # A regular file where the mon data dirs should go
        settings.lib_dir.mkdir(parents=True)
        (settings.lib_dir / "mon").write_text("")

        with pytest.raises(BootstrapError) as exc_info:
            await bootstrap.run()

        assert isinstance(exc_info.value.__cause__, OSError)
        report = await load_report(settings.report_path)
        assert report.succeeded is False
        assert report.error
        assert report.phase("preflight").state == PhaseState.COMPLETED
        assert report.phase("mon").state == PhaseState.FAILED
        assert report.phase("mgr").state == PhaseState.SKIPPED
        assert report.phase("osd").state == PhaseState.SKIPPED
        for marker in settings.demo_markers:
            assert not marker.exists()

    @pytest.mark.asyncio
    async def test_admin_secret_not_reported(self, bootstrap, runner, settings):
        """Test a failed keyring command does not leak ADMIN_SECRET."""
        settings.admin_secret = "AQBTOPSECRETKEY=="
        runner.fail[("ceph-authtool",)] = 1

        with pytest.raises(CommandError):
            await bootstrap.run()

        saved = settings.report_path.read_text()
        assert "AQBTOPSECRETKEY==" not in saved
        report = await load_report(settings.report_path)
        assert "--add-key=***" in report.error
