import socket
from typing import Optional, Tuple

from .base import UdpTransport


class SocketUdpTransport(UdpTransport):
    """UDP transport over a non-blocking datagram socket.

    Incoming datagrams are consumed one at a time: ``check_incoming`` pulls
    the next datagram off the socket (dropping any unread remainder of the
    previous one) and ``read_byte`` walks through it.
    """

    MAX_DATAGRAM_SIZE = 2048

    def __init__(self, bind_host: str = ""):
        self.bind_host = bind_host
        self._sock: Optional[socket.socket] = None
        self._dest: Optional[Tuple[str, int]] = None
        self._outgoing: Optional[bytearray] = None
        self._incoming = b""
        self._pos = 0

    def open(self, local_port: int) -> bool:
        self.close()
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.setblocking(False)
            sock.bind((self.bind_host, local_port))
        except OSError:
            sock.close()
            return False
        self._sock = sock
        return True

    def close(self) -> None:
        if self._sock:
            try:
                self._sock.close()
            except OSError:
                pass
            finally:
                self._sock = None
        self._dest = None
        self._outgoing = None
        self._incoming = b""
        self._pos = 0

    def begin_send(self, host: str, port: int) -> bool:
        if not self._sock or not host:
            return False
        self._dest = (host, port)
        self._outgoing = bytearray()
        return True

    def write(self, data: bytes) -> int:
        if self._outgoing is None:
            return 0
        self._outgoing.extend(data)
        return len(data)

    def finish_send(self) -> bool:
        if not self._sock or self._dest is None or self._outgoing is None:
            return False
        payload = bytes(self._outgoing)
        self._outgoing = None
        try:
            sent = self._sock.sendto(payload, self._dest)
        except OSError:
            # includes name resolution failures (socket.gaierror)
            return False
        return sent == len(payload)

    def check_incoming(self) -> int:
        if not self._sock:
            return 0
        try:
            data, _addr = self._sock.recvfrom(self.MAX_DATAGRAM_SIZE)
        except (BlockingIOError, InterruptedError):
            return 0
        except OSError:
            # e.g. ICMP port unreachable reported on the next receive
            return 0
        self._incoming = data
        self._pos = 0
        return len(data)

    def read_byte(self) -> int:
        if self._pos >= len(self._incoming):
            return -1
        b = self._incoming[self._pos]
        self._pos += 1
        return b

    def discard_incoming(self) -> None:
        self._incoming = b""
        self._pos = 0
        if not self._sock:
            return
        while True:
            try:
                self._sock.recvfrom(self.MAX_DATAGRAM_SIZE)
            except OSError:
                break

    @property
    def local_address(self) -> Optional[Tuple[str, int]]:
        return self._sock.getsockname() if self._sock else None

    @property
    def is_open(self) -> bool:
        return self._sock is not None
