"""Host name and monitor address discovery."""

import socket

from .errors import AddressDiscoveryError


def short_hostname() -> str:
    """Host name up to the first dot (``hostname -s``)."""
    return socket.gethostname().split(".")[0]


def discover_mon_ip(hostname: str) -> str:
    """
    Resolve the address the monitor binds to.

    Returns the first IPv4 address the resolver yields for ``hostname`` with
    a stream socket type, in resolver order.

    Raises:
        AddressDiscoveryError: If the host has no such address
    """
    try:
        infos = socket.getaddrinfo(
            hostname, None, socket.AF_INET, socket.SOCK_STREAM
        )
    except socket.gaierror as e:
        raise AddressDiscoveryError(
            f"Cannot resolve an IPv4 address for {hostname}: {e}"
        ) from e

    for family, socktype, _proto, _canonname, sockaddr in infos:
        if family == socket.AF_INET and socktype == socket.SOCK_STREAM:
            return sockaddr[0]

    raise AddressDiscoveryError(f"No IPv4 stream address found for {hostname}")
