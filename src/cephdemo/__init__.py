"""
cephdemo - Single-node Ceph demo cluster bootstrap

Brings up a monitor, a manager and object storage daemons on one host:
- Idempotent generation of the cluster config, keyrings and monitor map
- Sequential bootstrap of mon, mgr and OSDs through the Ceph tools
- Watch loop (``ceph -w``) once the cluster is up
- Read-only status API over the bootstrap artifacts
"""

__version__ = "0.1.0"
__author__ = "cephdemo Team"
