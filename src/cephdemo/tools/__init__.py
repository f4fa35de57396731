"""Wrappers around the external Ceph tools."""

from .ceph import CephTools
from .runner import CommandResult, CommandRunner, SubprocessRunner

__all__ = ["CephTools", "CommandRunner", "CommandResult", "SubprocessRunner"]
