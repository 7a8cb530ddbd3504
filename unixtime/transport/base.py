from abc import ABC, abstractmethod


class UdpTransport(ABC):
    @abstractmethod
    def open(self, local_port: int) -> bool:
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    @abstractmethod
    def begin_send(self, host: str, port: int) -> bool:
        pass

    @abstractmethod
    def write(self, data: bytes) -> int:
        pass

    @abstractmethod
    def finish_send(self) -> bool:
        pass

    @abstractmethod
    def check_incoming(self) -> int:
        pass

    @abstractmethod
    def read_byte(self) -> int:
        pass

    def read(self, size: int) -> bytes:
        out = bytearray()
        for _ in range(size):
            b = self.read_byte()
            if b < 0:
                break
            out.append(b)
        return bytes(out)

    @abstractmethod
    def discard_incoming(self) -> None:
        pass

    @property
    @abstractmethod
    def is_open(self) -> bool:
        pass
