"""
Transport layer for node communication.

This package provides transport implementations for talking to a node over
a stream socket, plus a mock for tests.

Available transports:
- StreamSocketTransport: TCP and local domain sockets
- MockTransport: Mock transport for testing without a node

Example:
    >>> from nanoclient.transport import StreamSocketTransport, parse_connection_string
    >>> endpoint, err = parse_connection_string("tcp://localhost:7077")
    >>> with StreamSocketTransport(endpoint) as transport:
    ...     transport.write(frame_data)
    ...     response = transport.read(4)

Testing Example:
    >>> from nanoclient.transport import MockTransport
    >>> mock = MockTransport()
    >>> mock.add_response(b"N\\x00\\x01\\x00")
"""

from nanoclient.transport.abc import AbstractTransport
from nanoclient.transport.endpoint import Endpoint, parse_connection_string
from nanoclient.transport.mock import MockTransport
from nanoclient.transport.stream import StreamSocketTransport

__all__ = [
    "AbstractTransport",
    "Endpoint",
    "MockTransport",
    "StreamSocketTransport",
    "parse_connection_string",
]
