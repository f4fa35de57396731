"""Configuration management for cephdemo."""

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

from .network import short_hostname


class Settings(BaseSettings):
    """cephdemo configuration settings."""

    # General settings
    debug: bool = False
    log_level: str = "INFO"
    log_file: Path | None = None

    # Cluster identity
    cluster: str = "ceph"
    hostname: str = Field(default_factory=short_hostname)
    mon_port: int = 3300
    osd_count: int = Field(default=1, ge=1)

    # Filesystem layout
    etc_dir: Path = Field(default=Path("/etc/ceph"))
    lib_dir: Path = Field(default=Path("/var/lib/ceph"))

    # Ownership applied to keyrings and daemon directories
    ceph_user: str = "ceph"
    ceph_group: str = "ceph"
    mon_data_uid: int = 167
    mon_data_gid: int = 167

    # Variables read without the CEPH_DEMO_ prefix
    admin_secret: str | None = Field(
        default=None, validation_alias=AliasChoices("ADMIN_SECRET", "admin_secret")
    )
    osd_device: str | None = Field(
        default=None, validation_alias=AliasChoices("OSD_DEVICE", "osd_device")
    )
    osd_max_object_size: int = Field(
        default=134217728,  # 128MB
        validation_alias=AliasChoices("OSD_MAX_OBJECT_SIZE", "osd_max_object_size"),
    )
    public_network: str = Field(
        default="",
        validation_alias=AliasChoices("CEPH_PUBLIC_NETWORK", "public_network"),
    )
    new_user_keyring: str | None = Field(
        default=None,
        validation_alias=AliasChoices("NEW_USER_KEYRING", "new_user_keyring"),
    )
    osd_bootstrap_keyring: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("OSD_BOOTSTRAP_KEYRING", "osd_bootstrap_keyring"),
    )
    mon_ip: str | None = Field(
        default=None, validation_alias=AliasChoices("MON_IP", "mon_ip")
    )

    # Status API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    model_config = {
        "env_prefix": "CEPH_DEMO_",
        "env_file": ".env",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @field_validator(
        "admin_secret", "osd_device", "new_user_keyring", "osd_bootstrap_keyring", "mon_ip",
        mode="before",
    )
    @classmethod
    def _blank_is_unset(cls, value):
        # Exported-but-empty variables count as unset
        if isinstance(value, str) and not value.strip():
            return None
        return value

    # Names

    @property
    def mon_name(self) -> str:
        return self.hostname

    @property
    def mgr_name(self) -> str:
        return self.hostname

    @property
    def owner(self) -> str:
        """Owner argument passed to chown, e.g. ``ceph:ceph``."""
        return f"{self.ceph_user}:{self.ceph_group}"

    # Artifact paths

    @property
    def conf_path(self) -> Path:
        return self.etc_dir / f"{self.cluster}.conf"

    @property
    def admin_keyring(self) -> Path:
        return self.etc_dir / f"{self.cluster}.client.admin.keyring"

    @property
    def mon_keyring(self) -> Path:
        return self.etc_dir / f"{self.cluster}.mon.keyring"

    @property
    def monmap(self) -> Path:
        return self.etc_dir / f"monmap-{self.cluster}"

    @property
    def legacy_monmap(self) -> Path:
        return self.etc_dir / "monmap"

    @property
    def mon_data_dir(self) -> Path:
        return self.lib_dir / "mon" / f"{self.cluster}-{self.mon_name}"

    @property
    def mgr_path(self) -> Path:
        return self.lib_dir / "mgr" / f"{self.cluster}-{self.mgr_name}"

    def osd_path(self, osd_id: int) -> Path:
        """Data directory of OSD ``osd_id``."""
        return self.lib_dir / "osd" / f"{self.cluster}-{osd_id}"

    @property
    def demo_markers(self) -> tuple[Path, Path]:
        return (self.etc_dir / "I_AM_A_DEMO", self.lib_dir / "I_AM_A_DEMO")

    @property
    def report_path(self) -> Path:
        return self.lib_dir / "demo-bootstrap.json"

    # Command-line options

    @property
    def daemon_opts(self) -> list[str]:
        """Options shared by every daemon the demo starts."""
        return [
            "--cluster", self.cluster,
            "--setuser", self.ceph_user,
            "--setgroup", self.ceph_group,
            "--default-log-to-stderr=true",
            "--err-to-stderr=true",
            "--default-log-to-file=false",
        ]

    @property
    def cli_opts(self) -> list[str]:
        return ["--cluster", self.cluster]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
