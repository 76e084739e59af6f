"""
Node session.

This module provides the Session: the owner of one connection to a node and
of the request/response protocol spoken over it.

Every request is one exchange, performed as a fixed sequence of steps that
stops at the first failure:

    write preamble -> write header frame -> write payload frame
    -> read preamble -> read header frame -> read payload frame

Each step either succeeds or produces a ProtocolError, which becomes the
result of the whole call. Nothing is raised for I/O, framing or
serialization failures.

Example:
    >>> from nanoclient import Session
    >>> from nanoclient.models import ReqPing, ResPing
    >>>
    >>> session = Session(connect_timeout=2)
    >>> err = session.connect("local:///tmp/nano")
    >>> if err is None:
    ...     pong = ResPing()
    ...     err = session.request(ReqPing(id=1000), pong)
    ...     session.close()
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Callable

from nanoclient.exceptions import (
    ConnectionError,
    ErrorCategory,
    ProtocolError,
    TimeoutError,
    TransportError,
)
from nanoclient.models.api import APIVersion, RequestHeader, ResponseHeader
from nanoclient.protocol.codec import deserialize, resolve_request_type, serialize
from nanoclient.protocol.constants import ProtocolConstants
from nanoclient.protocol.framing import (
    build_preamble,
    check_preamble,
    decode_length,
    encode_length,
)
from nanoclient.transport.endpoint import Endpoint, parse_connection_string
from nanoclient.transport.stream import StreamSocketTransport

if TYPE_CHECKING:
    from types import TracebackType

    from nanoclient.config import NodeConfig
    from nanoclient.models.messages import Message
    from nanoclient.transport.abc import AbstractTransport

TransportFactory = Callable[[Endpoint, float], "AbstractTransport"]
"""Builds an unopened transport for an endpoint and a connect timeout."""


class Session:
    """
    A session with a node.

    The session owns one transport for its connected lifetime. All public
    operations take the session lock, so concurrent ``request`` calls on
    one session run one after another and never interleave on the wire.
    Independent sessions share nothing.

    Timeouts can be changed any time before ``connect``. A timeout of 0 or
    None falls back to the default when ``connect`` runs.

    Attributes:
        read_write_timeout: Seconds allowed for each individual read or write.
        connect_timeout: Seconds allowed for the dial.
        connected: Whether the session currently holds an open transport.
        last_error: Error of the most recent operation, or None.

    Example:
        >>> with Session() as session:
        ...     if session.connect("tcp://localhost:7077") is None:
        ...         session.request(ReqBlockCount(), ResBlockCount())
    """

    def __init__(
        self,
        read_write_timeout: float = ProtocolConstants.DEFAULT_READ_WRITE_TIMEOUT,
        connect_timeout: float = ProtocolConstants.DEFAULT_CONNECT_TIMEOUT,
        *,
        transport_factory: TransportFactory | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """
        Initialize an unconnected session.

        Args:
            read_write_timeout: Per-step read/write timeout in seconds.
            connect_timeout: Dial timeout in seconds.
            transport_factory: Builds the transport on connect. Defaults to
                StreamSocketTransport.
            logger: Logger for session events. Defaults to the module logger.
        """
        self.read_write_timeout = read_write_timeout
        self.connect_timeout = connect_timeout
        self._transport_factory = transport_factory or StreamSocketTransport
        self._logger = logger or logging.getLogger(__name__)
        self._transport: AbstractTransport | None = None
        self._connected = False
        self._last_error: ProtocolError | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: NodeConfig, **kwargs) -> Session:
        """
        Create a session with the timeouts from a NodeConfig.

        Args:
            config: Node configuration.
            **kwargs: Passed on to the constructor (transport_factory, logger).
        """
        return cls(
            read_write_timeout=config.read_write_timeout,
            connect_timeout=config.connect_timeout,
            **kwargs,
        )

    @property
    def connected(self) -> bool:
        """Check if the session holds an open transport."""
        return self._connected

    @property
    def transport(self) -> AbstractTransport | None:
        """Get the underlying transport while connected."""
        return self._transport

    @property
    def last_error(self) -> ProtocolError | None:
        """Get the error of the most recent operation, or None."""
        return self._last_error

    def connect(self, connection_string: str) -> ProtocolError | None:
        """
        Connect to a node.

        A session that is already connected drops its old connection and
        dials again.

        Args:
            connection_string: ``tcp://host:port`` or ``local:///path``.

        Returns:
            None on success, otherwise a Connection error.
        """
        with self._lock:
            self._last_error = self._connect(connection_string)
            return self._last_error

    def close(self) -> ProtocolError | None:
        """
        Close the connection to the node.

        Closing a session that is not connected does nothing.

        Returns:
            None, or a Connection error if closing the transport failed. The
            session is disconnected either way.
        """
        with self._lock:
            self._last_error = self._close()
            return self._last_error

    def request(self, request: Message, response: Message) -> ProtocolError | None:
        """
        Send a request to the node and read its response.

        Args:
            request: Request payload message.
            response: Pre-allocated response message; populated in place on
                success.

        Returns:
            None on success, otherwise the error of the first failed step.
            After an error the stream position is unknown and the session
            should be closed and reconnected.

        Raises:
            RequestTypeError: If the request's declared name does not map to
                a known request type.
        """
        with self._lock:
            self._last_error = self._exchange(request, response)
            return self._last_error

    def _connect(self, connection_string: str) -> ProtocolError | None:
        endpoint, err = parse_connection_string(connection_string)
        if err is not None:
            self._logger.warning("Cannot connect to %r: %s", connection_string, err)
            return err

        if not self.connect_timeout:
            self.connect_timeout = ProtocolConstants.DEFAULT_CONNECT_TIMEOUT
        if not self.read_write_timeout:
            self.read_write_timeout = ProtocolConstants.DEFAULT_READ_WRITE_TIMEOUT

        if self._connected:
            self._logger.debug("Replacing connection to %s", self._transport.name)
            stale = self._close()
            if stale is not None:
                self._logger.warning("Closing stale connection failed: %s", stale)

        transport = self._transport_factory(endpoint, self.connect_timeout)
        try:
            transport.open()
        except (ConnectionError, TransportError) as e:
            self._logger.warning("Connection to %s failed: %s", endpoint, e)
            return ProtocolError.from_exception(e, ErrorCategory.CONNECTION)

        self._transport = transport
        self._connected = True
        self._logger.info("Connected to %s", endpoint)
        return None

    def _close(self) -> ProtocolError | None:
        if not self._connected:
            return None

        transport, self._transport = self._transport, None
        self._connected = False
        try:
            transport.close()
        except TransportError as e:
            return ProtocolError.from_exception(e, ErrorCategory.CONNECTION)
        self._logger.info("Closed connection to %s", transport.name)
        return None

    def _exchange(self, request: Message, response: Message) -> ProtocolError | None:
        if not self._connected:
            return ProtocolError(1, "Not connected", ErrorCategory.NETWORK)

        request_type = resolve_request_type(request)
        self._logger.debug("%s:%d", request_type.name, request_type.value)

        err = self._write(build_preamble(APIVersion.VERSION_MAJOR, APIVersion.VERSION_MINOR))
        if err is not None:
            return err

        header_data, err = serialize(RequestHeader(type=request_type))
        if err is not None:
            return err
        err = self._write_frame(header_data)
        if err is not None:
            return err

        payload_data, err = serialize(request)
        if err is not None:
            return err
        err = self._write_frame(payload_data)
        if err is not None:
            return err

        preamble, err = self._read(ProtocolConstants.PREAMBLE_SIZE)
        if err is not None:
            return err
        err = check_preamble(preamble, APIVersion.VERSION_MAJOR)
        if err is not None:
            return err

        header_data, err = self._read_frame()
        if err is not None:
            return err
        err = deserialize(header_data, ResponseHeader())
        if err is not None:
            return err

        payload_data, err = self._read_frame()
        if err is not None:
            return err
        err = deserialize(payload_data, response)
        if err is not None:
            return err

        self._logger.debug("%s completed", request_type.name)
        return None

    def _write(self, data: bytes) -> ProtocolError | None:
        """Refresh the write deadline and write ``data``."""
        self._transport.set_write_deadline(self.read_write_timeout)
        try:
            self._transport.write(data)
        except (TimeoutError, TransportError) as e:
            self._logger.warning("Write to %s failed: %s", self._transport.name, e)
            return ProtocolError.from_exception(e, ErrorCategory.NETWORK)
        return None

    def _write_frame(self, data: bytes) -> ProtocolError | None:
        """Write the length prefix, then the data, as two writes."""
        try:
            prefix = encode_length(len(data))
        except ValueError as e:
            return ProtocolError.from_exception(e, ErrorCategory.MARSHALLING)
        err = self._write(prefix)
        if err is not None:
            return err
        return self._write(data)

    def _read(self, size: int) -> tuple[bytes, ProtocolError | None]:
        """Refresh the read deadline and read exactly ``size`` bytes."""
        self._transport.set_read_deadline(self.read_write_timeout)
        try:
            return self._transport.read(size), None
        except (TimeoutError, TransportError) as e:
            self._logger.warning("Read from %s failed: %s", self._transport.name, e)
            return b"", ProtocolError.from_exception(e, ErrorCategory.NETWORK)

    def _read_frame(self) -> tuple[bytes, ProtocolError | None]:
        """Read a length prefix, then exactly that many bytes."""
        prefix, err = self._read(ProtocolConstants.LENGTH_PREFIX_SIZE)
        if err is not None:
            return b"", err
        return self._read(decode_length(prefix))

    def __enter__(self) -> Session:
        """Context manager entry."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Context manager exit - close the connection."""
        self.close()

    def __repr__(self) -> str:
        state = "connected" if self._connected else "disconnected"
        name = self._transport.name if self._transport is not None else "None"
        return f"Session({state}, transport={name})"
