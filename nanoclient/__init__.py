"""
nanoclient - Python client for the node's binary request/response protocol.

This library talks to a node over TCP or a local domain socket using the
length-prefixed binary protocol: a 4-byte preamble, a header frame carrying
the request type, and a payload frame, in each direction.

Example:
    >>> from nanoclient import Session
    >>> from nanoclient.models import ReqPing, ResPing
    >>>
    >>> session = Session()
    >>> err = session.connect("local:///tmp/nano")
    >>> if err is None:
    ...     pong = ResPing()
    ...     err = session.request(ReqPing(id=1000), pong)
    ...     print(err or pong.id)
    ...     session.close()
"""

from nanoclient.config import NodeConfig
from nanoclient.exceptions import (
    ConnectionError,
    ErrorCategory,
    NanoClientError,
    ProtocolError,
    RequestTypeError,
    TimeoutError,
    TransportError,
)
from nanoclient.models import (
    APIVersion,
    Message,
    RequestHeader,
    RequestType,
    ResponseHeader,
    lookup_message,
    new_message,
)
from nanoclient.pool import SessionPool
from nanoclient.session import Session
from nanoclient.transport import AbstractTransport, MockTransport, StreamSocketTransport

__version__ = "0.1.0"
__all__ = [
    # Session
    "Session",
    "SessionPool",
    "NodeConfig",
    # Models
    "Message",
    "RequestType",
    "APIVersion",
    "RequestHeader",
    "ResponseHeader",
    "lookup_message",
    "new_message",
    # Errors
    "ProtocolError",
    "ErrorCategory",
    "NanoClientError",
    "TransportError",
    "TimeoutError",
    "ConnectionError",
    "RequestTypeError",
    # Transport
    "AbstractTransport",
    "StreamSocketTransport",
    "MockTransport",
    # Version
    "__version__",
]
