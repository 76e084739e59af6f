"""Shared fixtures: mock-backed sessions and a threaded echo node."""

from __future__ import annotations

import os
import shutil
import socket
import tempfile
import threading

import pytest

from nanoclient import Session
from nanoclient.models import APIVersion, ResponseHeader
from nanoclient.protocol import build_preamble, decode_length, frame, serialize
from nanoclient.transport import MockTransport


def _response_bytes(
    payload,
    *,
    major: int = APIVersion.VERSION_MAJOR,
    minor: int = APIVersion.VERSION_MINOR,
    header=None,
) -> bytes:
    header_data, _ = serialize(header or ResponseHeader())
    if not isinstance(payload, (bytes, bytearray)):
        payload, _ = serialize(payload)
    return build_preamble(major, minor) + frame(header_data) + frame(bytes(payload))


@pytest.fixture
def node_response():
    """Build the bytes a node sends back: preamble, header frame, payload frame."""
    return _response_bytes


@pytest.fixture
def mock_transport():
    """Create a MockTransport instance."""
    return MockTransport()


@pytest.fixture
def session(mock_transport):
    """Create an unconnected Session whose transport is the mock."""
    return Session(
        read_write_timeout=5,
        connect_timeout=1,
        transport_factory=lambda endpoint, timeout: mock_transport,
    )


@pytest.fixture
def connected_session(session, mock_transport):
    """Create a Session connected to the mock, with the call history cleared."""
    assert session.connect("tcp://node.test:7077") is None
    mock_transport.clear()
    return session


class EchoNode:
    """
    Minimal node: reads framed requests and answers with the payload echoed.

    Every request is recorded as (preamble, header bytes, payload bytes).
    With ``respond=False`` it reads requests but never answers.
    """

    def __init__(self, family: int, address, *, respond: bool = True) -> None:
        self.respond = respond
        self.major = APIVersion.VERSION_MAJOR
        self.requests: list[tuple[bytes, bytes, bytes]] = []
        self._stop = threading.Event()
        self._server = socket.socket(family, socket.SOCK_STREAM)
        if family != getattr(socket, "AF_UNIX", None):
            self._server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._server.bind(address)
        self._server.listen(8)
        self._server.settimeout(0.1)
        self.address = self._server.getsockname()
        self._thread = threading.Thread(target=self._accept_loop, daemon=True)
        self._thread.start()

    def _accept_loop(self) -> None:
        while not self._stop.is_set():
            try:
                conn, _ = self._server.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            threading.Thread(target=self._serve, args=(conn,), daemon=True).start()

    def _serve(self, conn: socket.socket) -> None:
        conn.settimeout(None)
        with conn, conn.makefile("rb") as stream:
            while True:
                preamble = stream.read(4)
                if len(preamble) < 4:
                    return
                header = self._read_frame(stream)
                payload = self._read_frame(stream)
                if header is None or payload is None:
                    return
                self.requests.append((preamble, header, payload))
                if not self.respond:
                    continue
                try:
                    conn.sendall(_response_bytes(payload, major=self.major))
                except OSError:
                    return

    @staticmethod
    def _read_frame(stream):
        prefix = stream.read(4)
        if len(prefix) < 4:
            return None
        length = decode_length(prefix)
        data = stream.read(length)
        if len(data) < length:
            return None
        return data

    def close(self) -> None:
        self._stop.set()
        self._thread.join(timeout=2)
        self._server.close()


@pytest.fixture
def local_node():
    """Echo node on a local domain socket; yields (node, connection string)."""
    if not hasattr(socket, "AF_UNIX"):
        pytest.skip("local domain sockets not available")
    directory = tempfile.mkdtemp(prefix="nano")
    path = os.path.join(directory, "node.sock")
    node = EchoNode(socket.AF_UNIX, path)
    try:
        yield node, f"local://{path}"
    finally:
        node.close()
        shutil.rmtree(directory, ignore_errors=True)


@pytest.fixture
def tcp_node():
    """Echo node on 127.0.0.1; yields (node, connection string)."""
    node = EchoNode(socket.AF_INET, ("127.0.0.1", 0))
    host, port = node.address
    try:
        yield node, f"tcp://{host}:{port}"
    finally:
        node.close()
