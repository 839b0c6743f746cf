import socket
import time

from .base import Transport
from simplentp.utils.constants import PACKET_SIZE
from simplentp.utils.exceptions import TransportError, ResolutionError, QueryTimeoutError
from simplentp.utils.logger import get_logger

log = get_logger(__name__)


class UdpTransport(Transport):
    """Connected UDP socket whose whole lifetime is bounded by one deadline.

    The deadline is fixed when the transport is created; connect, write and
    read each get only the time that is left.
    """

    def __init__(self, host: str, port: int, timeout: float):
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self.host = host
        self.port = port
        self.timeout = timeout
        self._deadline = time.monotonic() + timeout
        self._sock = None

        try:
            infos = socket.getaddrinfo(host, port, 0, socket.SOCK_DGRAM)
        except (socket.gaierror, UnicodeError) as e:
            raise ResolutionError(f"Failed to resolve {host}: {e}") from e
        if not infos:
            raise ResolutionError(f"Failed to resolve {host}: no addresses")

        family, socktype, proto, _canonname, sockaddr = infos[0]
        log.debug("Resolved %s:%d to %s", host, port, sockaddr[0])

        try:
            self._sock = socket.socket(family, socktype, proto)
            self._apply_timeout("connect")
            self._sock.connect(sockaddr)
        except TransportError:
            self.close()
            raise
        except socket.timeout as e:
            self.close()
            raise QueryTimeoutError(f"Timed out connecting to {host}:{port}") from e
        except OSError as e:
            self.close()
            raise TransportError(f"Failed to connect to {host}:{port}: {e}") from e

    def _remaining(self, step: str) -> float:
        remaining = self._deadline - time.monotonic()
        if remaining <= 0:
            raise QueryTimeoutError(
                f"Deadline of {self.timeout}s exceeded before {step} ({self.host}:{self.port})"
            )
        return remaining

    def _apply_timeout(self, step: str):
        remaining = self._remaining(step)
        try:
            self._sock.settimeout(remaining)
        except (OverflowError, ValueError) as e:
            raise TransportError(f"Unusable timeout of {self.timeout}s for {step}: {e}") from e

    def _require_open(self):
        if self._sock is None:
            raise TransportError("Transport is closed")

    def write(self, data: bytes) -> int:
        self._require_open()
        self._apply_timeout("write")
        try:
            return self._sock.send(data)
        except socket.timeout as e:
            raise QueryTimeoutError(f"Timed out sending to {self.host}:{self.port}") from e
        except OSError as e:
            raise TransportError(f"UDP write error: {e}") from e

    def read(self, size: int = PACKET_SIZE) -> bytes:
        self._require_open()
        self._apply_timeout("read")
        try:
            data = self._sock.recv(size)
        except socket.timeout as e:
            raise QueryTimeoutError(
                f"No reply from {self.host}:{self.port} within {self.timeout}s"
            ) from e
        except OSError as e:
            raise TransportError(f"UDP read error: {e}") from e
        log.debug("Received %d bytes from %s:%d", len(data), self.host, self.port)
        return data

    def close(self) -> None:
        if self._sock is not None:
            try:
                self._sock.close()
            finally:
                self._sock = None

    @property
    def is_open(self) -> bool:
        return self._sock is not None
