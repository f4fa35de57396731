"""Tests for the cluster config file."""

import pytest

from cephdemo.bootstrap.conf import (
    ensure_cluster_conf,
    ensure_osd_section,
    parse_fsid,
    render_global_section,
)


@pytest.fixture
def conf_args(tmp_path):
    """Arguments for a demo config in a temporary directory."""
    return {
        "conf_path": tmp_path / "ceph.conf",
        "mon_name": "demo",
        "mon_ip": "192.0.2.10",
        "mon_port": 3300,
        "public_network": "192.0.2.0/24",
        "osd_max_object_size": 134217728,
    }


class TestClusterConf:
    """Cluster config tests."""

    def test_render_global_section(self):
        """Test the global section carries the single-node defaults."""
        text = render_global_section(
            fsid="1234",
            mon_name="demo",
            mon_ip="192.0.2.10",
            mon_port=3300,
            public_network="192.0.2.0/24",
            osd_max_object_size=1024,
        )

        assert text.startswith("[global]\n")
        assert "fsid = 1234\n" in text
        assert "mon initial members = demo\n" in text
        assert "mon host = v2:192.0.2.10:3300/0\n" in text
        assert "public network = 192.0.2.0/24\n" in text
        assert "cluster network = 192.0.2.0/24\n" in text
        assert "osd pool default size = 1\n" in text
        assert "osd_crush_chooseleaf_type = {0}\n" in text
        assert "osd_max_object_size = 1024\n" in text

    def test_parse_fsid(self):
        """Test fsid extraction."""
        assert parse_fsid("[global]\nfsid = abc-123\nmon host = x\n") == "abc-123"
        assert parse_fsid("[global]\nmon host = x\n") is None

    @pytest.mark.asyncio
    async def test_creates_conf_with_new_fsid(self, conf_args):
        """Test a missing config is written with a fresh fsid."""
        fsid = await ensure_cluster_conf(**conf_args)

        content = conf_args["conf_path"].read_text()
        assert len(fsid) == 36
        assert f"fsid = {fsid}" in content

    @pytest.mark.asyncio
    async def test_existing_conf_is_kept(self, conf_args):
        """Test an existing config is read, not rewritten."""
        conf_path = conf_args["conf_path"]
        conf_path.write_text("[global]\nfsid = existing-fsid\n")

        fsid = await ensure_cluster_conf(**conf_args)

        assert fsid == "existing-fsid"
        assert conf_path.read_text() == "[global]\nfsid = existing-fsid\n"

    @pytest.mark.asyncio
    async def test_second_call_returns_same_fsid(self, conf_args):
        """Test the fsid is stable across runs."""
        first = await ensure_cluster_conf(**conf_args)
        second = await ensure_cluster_conf(**conf_args)

        assert first == second


class TestOSDSection:
    """OSD section tests."""

    @pytest.mark.asyncio
    async def test_appends_once(self, conf_args, tmp_path):
        """Test the OSD section is appended only once."""
        await ensure_cluster_conf(**conf_args)
        osd_path = tmp_path / "osd" / "ceph-0"

        assert await ensure_osd_section(conf_args["conf_path"], 0, osd_path) is True
        assert await ensure_osd_section(conf_args["conf_path"], 0, osd_path) is False

        content = conf_args["conf_path"].read_text()
        assert content.count("[osd.0]") == 1
        assert f"osd data = {osd_path}\n" in content
