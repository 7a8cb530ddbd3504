from .base import UdpTransport
from .socket_udp import SocketUdpTransport


def create_transport(connection_string: str = "") -> UdpTransport:
    """Create a UDP transport for the given connection string.

    Args:
        connection_string: Local address to bind (e.g., '0.0.0.0', 'udp:192.168.1.20').
            Empty binds all interfaces.

    Returns:
        SocketUdpTransport instance
    """
    # Strip "udp:" prefix if present
    bind_host = connection_string or ""
    if bind_host.startswith("udp:"):
        bind_host = bind_host[4:]

    return SocketUdpTransport(bind_host=bind_host)


__all__ = [
    'UdpTransport',
    'SocketUdpTransport',
    'create_transport',
]
