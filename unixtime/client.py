"""
NTP client returning the server time as a Unix timestamp.

Only the first four bytes of an outgoing NTP request carry meaning for a
minimal client; the response is consumed one byte at a time and never
buffered. The transmit timestamp is rounded to the nearest second, taking
into account an assumed network delay and the time spent between the
arrival of the response and the moment it is read.

Two ways of using the client:

- Blocking: ``get_unix_time()`` sends a request and polls for the answer.
- Non-blocking: ``request_time()`` followed later by ``poll_response()``
  and/or ``poll_and_extract()`` from the caller's own loop or callback.
"""

import time
from enum import Enum
from typing import Optional

from unixtime.transport.base import UdpTransport
from unixtime.utils.constants import (
    NTP_PORT, NTP_PACKET_SIZE, NTP_UNIX_DELTA, NTP_REQUEST_HEADER,
    TRANSMIT_TIMESTAMP_OFFSET, ROUNDING_THRESHOLD, NOTIFIED_COMPENSATION,
    DEFAULT_POLL_INTERVAL_MS, DEFAULT_MAX_POLLS,
)


# Header word as laid out in device memory, zero padded to a full packet
NTP_REQUEST = NTP_REQUEST_HEADER.to_bytes(4, "little") + bytes(NTP_PACKET_SIZE - 4)


class ClientState(Enum):
    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting_response"
    RESPONSE_READY = "response_ready"


class Delivery(Enum):
    """How the response came to be read."""
    POLLED = "polled"        # found by the client's own polling
    NOTIFIED = "notified"    # signalled externally, read immediately


def build_request(header: bytes = NTP_REQUEST) -> bytes:
    """Return a full-size request packet starting with ``header``."""
    return bytes(header[:NTP_PACKET_SIZE]).ljust(NTP_PACKET_SIZE, b"\x00")


def rounds_up(fraction: int, compensation: int) -> bool:
    """True when the fractional byte pushes the time to the next second."""
    return fraction > ROUNDING_THRESHOLD - compensation


def ntp_to_unix(ntp_seconds: int) -> int:
    return ntp_seconds - NTP_UNIX_DELTA


class NtpTimeClient:
    """Minimal NTP client bound to a single UDP transport."""

    def __init__(self, transport: UdpTransport, time_server: Optional[str] = None,
                 server_port: int = NTP_PORT,
                 local_port: int = NTP_PORT,
                 poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
                 max_polls: int = DEFAULT_MAX_POLLS,
                 request: bytes = NTP_REQUEST):
        self.transport = transport
        self.time_server = time_server
        self.server_port = server_port
        self.local_port = local_port
        self.poll_interval_ms = poll_interval_ms
        self.max_polls = max_polls
        self._request = build_request(request)
        self._transport_ready = False
        self._state = ClientState.IDLE

    def __enter__(self):
        self.begin()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()

    @property
    def state(self) -> ClientState:
        return self._state

    @property
    def transport_ready(self) -> bool:
        return self._transport_ready

    @property
    def request(self) -> bytes:
        return self._request

    def compensation(self, delivery: Delivery) -> int:
        if delivery is Delivery.POLLED:
            # past the threshold every reply would round up
            return min(self.poll_interval_ms // 2, ROUNDING_THRESHOLD)
        return NOTIFIED_COMPENSATION

    def begin(self, local_port: Optional[int] = None) -> bool:
        """(Re)open the local UDP port. Returns whether it succeeded."""
        if local_port is not None:
            self.local_port = local_port
        self.transport.close()
        self._transport_ready = bool(self.transport.open(self.local_port))
        self._state = ClientState.IDLE
        return self._transport_ready

    def stop(self) -> None:
        self.transport.close()
        self._transport_ready = False
        self._state = ClientState.IDLE

    def request_time(self) -> bool:
        """Send one NTP request to the time server.

        Returns False without touching the transport if ``begin`` did not
        succeed, or when any stage of the send fails. A failed request is
        not retried.
        """
        if not self._transport_ready:
            return False

        # Any response still pending belongs to an earlier request
        self._state = ClientState.IDLE
        self.transport.discard_incoming()

        if not (self.transport.begin_send(self.time_server, self.server_port)
                and self.transport.write(self._request) == NTP_PACKET_SIZE
                and self.transport.finish_send()):
            return False

        self._state = ClientState.AWAITING_RESPONSE
        return True

    def poll_response(self) -> bool:
        """Non-blocking check for a complete response datagram."""
        if self._state is ClientState.RESPONSE_READY:
            return True
        if self.transport.check_incoming() != NTP_PACKET_SIZE:
            return False
        self._state = ClientState.RESPONSE_READY
        return True

    def poll_and_extract(self, length: Optional[int] = None) -> Optional[int]:
        """Return the Unix time from the pending response, or None.

        A response already found by ``poll_response`` is read with the
        poll-interval compensation. Otherwise the caller has been notified
        of an incoming datagram: ``length`` is its size as returned by the
        transport's ``check_incoming()``, which must already have made that
        datagram the current one. When omitted, the transport is asked here.
        If no datagram turns out to be loaded, nothing is drained and the
        state is left as it was.
        """
        if self._state is ClientState.RESPONSE_READY:
            return self._extract(Delivery.POLLED)

        if length is None:
            length = self.transport.check_incoming()
        if length != NTP_PACKET_SIZE:
            return None
        return self._extract(Delivery.NOTIFIED)

    def return_unix_time(self, length: Optional[int] = None) -> int:
        """Like ``poll_and_extract`` but returns 0 when no time is available."""
        unix_time = self.poll_and_extract(length)
        return unix_time if unix_time is not None else 0

    def get_unix_time(self) -> Optional[int]:
        """Request the time and block until answered or polls run out."""
        self.request_time()

        for _ in range(self.max_polls):
            if self.poll_response():
                break
            time.sleep(self.poll_interval_ms / 1000)

        return self.poll_and_extract()

    def _extract(self, delivery: Delivery) -> Optional[int]:
        # Stratum, reference/origin/receive timestamps: not needed
        skipped = self.transport.read(TRANSMIT_TIMESTAMP_OFFSET)
        if not skipped:
            # length was reported but the datagram is not loaded yet
            return None

        self._state = ClientState.IDLE

        seconds = self.transport.read(4)
        fraction = self.transport.read_byte()
        self.transport.discard_incoming()

        if len(seconds) != 4 or fraction < 0:
            return None

        ntp_seconds = int.from_bytes(seconds, "big")
        if rounds_up(fraction, self.compensation(delivery)):
            ntp_seconds += 1
        return ntp_to_unix(ntp_seconds)
