"""
Abstract transport interface for node communication.

This module defines the abstract base class for all transport
implementations. Transports handle the low-level byte stream to the node;
framing and message ordering belong to the Session.

The transport layer is responsible for:
- Opening/closing the stream connection
- Writing whole buffers and reading exact byte counts
- Enforcing per-direction deadlines

Implementations:
- StreamSocketTransport: TCP and local domain sockets
- MockTransport: For testing without a node
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types import TracebackType


class AbstractTransport(ABC):
    """
    Abstract base class for node transports.

    Transports provide blocking read/write operations. All transport
    implementations must inherit from this class and implement all abstract
    methods.

    Deadlines work like socket deadlines: ``set_read_deadline(30)`` means
    the reads that follow must complete within 30 seconds from now. The
    Session refreshes the deadline before every individual read and write.

    Transports support the context manager protocol for safe resource
    management:

        with StreamSocketTransport(endpoint) as transport:
            transport.write(frame)
            response = transport.read(4)

    Attributes:
        is_open: Whether the transport connection is currently open.
        name: Identifier for the transport (e.g., the connection string).
    """

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """
        Check if the transport connection is currently open.

        Returns:
            True if connected and ready for I/O, False otherwise.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Get the transport identifier.

        Returns:
            Identifier string (e.g., "tcp://localhost:7077").
        """
        ...

    @abstractmethod
    def open(self) -> None:
        """
        Open the transport connection.

        Raises:
            ConnectionError: If the node cannot be reached within the
                connect timeout.
            TransportError: If the transport is already open.
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """
        Close the transport connection.

        Safe to call multiple times (idempotent).

        Raises:
            TransportError: If releasing the connection fails.
        """
        ...

    @abstractmethod
    def set_read_deadline(self, timeout: float | None) -> None:
        """
        Set the read deadline to ``timeout`` seconds from now.

        Args:
            timeout: Seconds from now, or None for no deadline.
        """
        ...

    @abstractmethod
    def set_write_deadline(self, timeout: float | None) -> None:
        """
        Set the write deadline to ``timeout`` seconds from now.

        Args:
            timeout: Seconds from now, or None for no deadline.
        """
        ...

    @abstractmethod
    def write(self, data: bytes) -> None:
        """
        Write all of ``data`` to the transport.

        Args:
            data: Bytes to send.

        Raises:
            TimeoutError: If the write deadline passes first.
            TransportError: If the transport is not open or the write fails.
        """
        ...

    @abstractmethod
    def read(self, size: int) -> bytes:
        """
        Read an exact number of bytes from the transport.

        Blocks until exactly ``size`` bytes have been received. A short read
        is always an error, never a partial result.

        Args:
            size: Number of bytes to read.

        Returns:
            Exactly ``size`` bytes.

        Raises:
            TimeoutError: If the read deadline passes first.
            TransportError: If the transport is not open, the read fails, or
                the peer closes the connection early.
        """
        ...

    def __enter__(self) -> AbstractTransport:
        """Context manager entry - opens the transport."""
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Context manager exit - closes the transport."""
        self.close()
