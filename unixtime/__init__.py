__version__ = "0.1.0"

from .client import (
    NtpTimeClient, ClientState, Delivery,
    NTP_REQUEST, build_request, rounds_up, ntp_to_unix,
)
from .transport import UdpTransport, SocketUdpTransport, create_transport

__all__ = [
    '__version__',
    'NtpTimeClient', 'ClientState', 'Delivery',
    'NTP_REQUEST', 'build_request', 'rounds_up', 'ntp_to_unix',
    'UdpTransport', 'SocketUdpTransport', 'create_transport',
]
