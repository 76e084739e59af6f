"""
Stream socket transport.

This module provides the transport used against a real node: a blocking
stream socket over TCP or a local domain socket.

Deadlines are absolute points in time. Before each blocking socket call the
socket timeout is set to whatever is left of the relevant deadline, so a
single ``read(n)`` that arrives in several chunks is bounded by the deadline
as a whole, not per chunk.

Example:
    >>> endpoint, _ = parse_connection_string("local:///tmp/nano")
    >>> with StreamSocketTransport(endpoint, connect_timeout=2.0) as transport:
    ...     transport.set_write_deadline(30)
    ...     transport.write(b"N\\x00\\x01\\x00")
"""

from __future__ import annotations

import socket
import time

from nanoclient.exceptions import ConnectionError, TimeoutError, TransportError
from nanoclient.protocol.constants import ProtocolConstants
from nanoclient.transport.abc import AbstractTransport
from nanoclient.transport.endpoint import Endpoint


class StreamSocketTransport(AbstractTransport):
    """
    Blocking TCP / local domain socket transport.

    TCP connections enable keep-alive probes at ``keepalive_interval``
    seconds where the platform exposes the socket options.

    Attributes:
        endpoint: Parsed node address.
        name: Connection string form of the endpoint.
        is_open: Whether the socket is currently connected.
    """

    def __init__(
        self,
        endpoint: Endpoint,
        connect_timeout: float = ProtocolConstants.DEFAULT_CONNECT_TIMEOUT,
        keepalive_interval: int = ProtocolConstants.KEEPALIVE_INTERVAL,
    ) -> None:
        """
        Initialize the socket transport.

        Args:
            endpoint: Node address to dial on open().
            connect_timeout: Dial timeout in seconds.
            keepalive_interval: TCP keep-alive probe interval in seconds.
        """
        self._endpoint = endpoint
        self._connect_timeout = connect_timeout
        self._keepalive_interval = keepalive_interval
        self._sock: socket.socket | None = None
        self._read_deadline: float | None = None
        self._write_deadline: float | None = None

    @property
    def is_open(self) -> bool:
        """Check if the socket is connected."""
        return self._sock is not None

    @property
    def name(self) -> str:
        """Get the connection string of the endpoint."""
        return str(self._endpoint)

    @property
    def endpoint(self) -> Endpoint:
        """Get the endpoint."""
        return self._endpoint

    def open(self) -> None:
        """
        Dial the node.

        Raises:
            TransportError: If already open.
            ConnectionError: If the dial fails or times out.
        """
        if self._sock is not None:
            raise TransportError(f"Transport {self.name} already open")

        try:
            if self._endpoint.is_local:
                sock = self._dial_local()
            else:
                sock = socket.create_connection(
                    self._endpoint.address,
                    timeout=self._connect_timeout,
                )
                self._enable_keepalive(sock)
        except socket.timeout as e:
            raise ConnectionError(f"dial {self.name}: i/o timeout") from e
        except OSError as e:
            raise ConnectionError(f"dial {self.name}: {e.strerror or e}") from e

        self._sock = sock
        self._read_deadline = None
        self._write_deadline = None

    def close(self) -> None:
        """
        Close the socket.

        Safe to call multiple times.

        Raises:
            TransportError: If the OS reports an error while closing.
        """
        sock, self._sock = self._sock, None
        if sock is None:
            return
        try:
            sock.close()
        except OSError as e:
            raise TransportError(f"close {self.name}: {e}") from e

    def set_read_deadline(self, timeout: float | None) -> None:
        """Set the read deadline to ``timeout`` seconds from now."""
        self._read_deadline = None if timeout is None else time.monotonic() + timeout

    def set_write_deadline(self, timeout: float | None) -> None:
        """Set the write deadline to ``timeout`` seconds from now."""
        self._write_deadline = None if timeout is None else time.monotonic() + timeout

    def write(self, data: bytes) -> None:
        """
        Send all of ``data``.

        Raises:
            TimeoutError: If the write deadline passes.
            TransportError: If not open or the socket fails.
        """
        sock = self._require_open()
        self._apply_deadline(sock, self._write_deadline, "write")
        try:
            sock.sendall(data)
        except socket.timeout:
            raise TimeoutError(f"write {self.name}: i/o timeout") from None
        except OSError as e:
            raise TransportError(f"write {self.name}: {e}") from e

    def read(self, size: int) -> bytes:
        """
        Read exactly ``size`` bytes.

        Raises:
            TimeoutError: If the read deadline passes first.
            TransportError: If not open, the socket fails, or the peer
                closes the connection before ``size`` bytes arrive.
        """
        sock = self._require_open()
        if size <= 0:
            return b""

        # Grow with the data received; size comes from the peer
        buffer = bytearray()
        while len(buffer) < size:
            self._apply_deadline(sock, self._read_deadline, "read")
            try:
                chunk = sock.recv(min(size - len(buffer), ProtocolConstants.RECV_CHUNK_SIZE))
            except socket.timeout:
                raise TimeoutError(f"read {self.name}: i/o timeout") from None
            except OSError as e:
                raise TransportError(f"read {self.name}: {e}") from e
            if not chunk:
                raise TransportError(
                    f"Connection closed: expected {size} bytes, got {len(buffer)}"
                )
            buffer.extend(chunk)
        return bytes(buffer)

    def _require_open(self) -> socket.socket:
        if self._sock is None:
            raise TransportError("Socket is not open")
        return self._sock

    def _apply_deadline(self, sock: socket.socket, deadline: float | None, op: str) -> None:
        if deadline is None:
            sock.settimeout(None)
            return
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise TimeoutError(f"{op} {self.name}: i/o timeout")
        sock.settimeout(remaining)

    def _dial_local(self) -> socket.socket:
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.settimeout(self._connect_timeout)
            sock.connect(self._endpoint.path)
        except OSError:
            sock.close()
            raise
        return sock

    def _enable_keepalive(self, sock: socket.socket) -> None:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)
        # Option names differ by platform: TCP_KEEPIDLE on Linux, TCP_KEEPALIVE on macOS
        idle_option = getattr(socket, "TCP_KEEPIDLE", None) or getattr(socket, "TCP_KEEPALIVE", None)
        if idle_option is not None:
            sock.setsockopt(socket.IPPROTO_TCP, idle_option, self._keepalive_interval)
        if hasattr(socket, "TCP_KEEPINTVL"):
            sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_KEEPINTVL, self._keepalive_interval)

    def __repr__(self) -> str:
        status = "open" if self.is_open else "closed"
        return f"StreamSocketTransport({self.name!r}, {status})"
