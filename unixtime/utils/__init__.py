from .constants import (
    NTP_PORT, NTP_PACKET_SIZE, NTP_UNIX_DELTA,
    TRANSMIT_TIMESTAMP_OFFSET, ROUNDING_THRESHOLD, NOTIFIED_COMPENSATION,
    DEFAULT_POLL_INTERVAL_MS, MAX_POLL_INTERVAL_MS, DEFAULT_MAX_POLLS,
    DEFAULT_TIME_SERVER, NTP_REQUEST_HEADER,
)
from .exceptions import (
    UnixTimeException, TransportError,
    CLIError, ValidationError,
)

__all__ = [
    'NTP_PORT', 'NTP_PACKET_SIZE', 'NTP_UNIX_DELTA',
    'TRANSMIT_TIMESTAMP_OFFSET', 'ROUNDING_THRESHOLD', 'NOTIFIED_COMPENSATION',
    'DEFAULT_POLL_INTERVAL_MS', 'MAX_POLL_INTERVAL_MS', 'DEFAULT_MAX_POLLS',
    'DEFAULT_TIME_SERVER', 'NTP_REQUEST_HEADER',
    'UnixTimeException', 'TransportError',
    'CLIError', 'ValidationError',
]
