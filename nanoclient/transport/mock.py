"""
Mock transport for testing.

This module provides a mock transport implementation that allows testing
the Session without a running node. Responses can be pre-configured or
generated from the written bytes with a callback.

Example:
    >>> from nanoclient.transport import MockTransport
    >>>
    >>> mock = MockTransport()
    >>> mock.add_response(b"N\\x00\\x01\\x00")  # response preamble
    >>> session = Session(transport_factory=lambda endpoint, timeout: mock)
"""

from __future__ import annotations

import threading
import time
from collections import deque
from typing import Callable

from nanoclient.exceptions import TimeoutError, TransportError
from nanoclient.transport.abc import AbstractTransport


class MockTransport(AbstractTransport):
    """
    Mock transport for testing without a node.

    Records all written data and every call made against it, and serves
    reads from a FIFO of queued responses plus anything produced by the
    response callback.

    Attributes:
        written_data: List of all bytes written to the transport.
        calls: Names of every I/O method called, in order.
        deadlines: ("read" | "write", timeout) for every deadline refresh.

    Example:
        >>> mock = MockTransport()
        >>> mock.add_response(b"\\x00\\x00\\x00\\x02hi")
        >>>
        >>> with mock:
        ...     mock.write(b"test")
        ...     assert mock.read(4) == b"\\x00\\x00\\x00\\x02"
        ...     assert mock.written_data == [b"test"]
    """

    def __init__(self, name: str = "mock://test") -> None:
        """
        Initialize the mock transport.

        Args:
            name: Identifier for the mock transport.
        """
        self._name = name
        self._is_open = False
        self._responses: deque[bytes] = deque()
        self._written_data: list[bytes] = []
        self._read_buffer = bytearray()
        self._response_callback: Callable[[bytes], bytes | None] | None = None
        self._calls: list[str] = []
        self._deadlines: list[tuple[str, float | None]] = []
        self._open_error: Exception | None = None
        self._close_error: Exception | None = None
        self._write_errors: dict[int, Exception] = {}
        self._write_delay = 0.0
        self._lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        """Check if the mock transport is open."""
        return self._is_open

    @property
    def name(self) -> str:
        """Get the mock transport name."""
        return self._name

    @property
    def written_data(self) -> list[bytes]:
        """Get all data written to the transport."""
        return self._written_data.copy()

    @property
    def last_written(self) -> bytes | None:
        """Get the most recently written data."""
        return self._written_data[-1] if self._written_data else None

    @property
    def calls(self) -> list[str]:
        """Get the names of all I/O calls made, in order."""
        return self._calls.copy()

    @property
    def deadlines(self) -> list[tuple[str, float | None]]:
        """Get all deadline refreshes, in order."""
        return self._deadlines.copy()

    @property
    def pending(self) -> int:
        """Number of bytes still available for reading."""
        return len(self._read_buffer) + sum(len(r) for r in self._responses)

    def add_response(self, response: bytes) -> None:
        """
        Add a response to the queue.

        Responses are returned in FIFO order on read operations.

        Args:
            response: Bytes to return on subsequent reads.
        """
        self._responses.append(response)

    def add_responses(self, *responses: bytes) -> None:
        """
        Add multiple responses to the queue.

        Args:
            *responses: Multiple byte responses to add.
        """
        for response in responses:
            self._responses.append(response)

    def set_response_callback(
        self,
        callback: Callable[[bytes], bytes | None] | None,
    ) -> None:
        """
        Set a callback to dynamically generate responses.

        The callback receives each written chunk and may return bytes to
        make available for reading. Returning None adds nothing.

        Args:
            callback: Function that takes written bytes and returns response.
        """
        self._response_callback = callback

    def fail_open(self, error: Exception) -> None:
        """Make the next open() raise ``error``."""
        self._open_error = error

    def fail_close(self, error: Exception) -> None:
        """Make the next close() of an open transport raise ``error``."""
        self._close_error = error

    def fail_write(self, index: int, error: Exception | None = None) -> None:
        """
        Make the write with the given zero-based index raise.

        Args:
            index: Index of the write to fail, counting all writes.
            error: Exception to raise (default: TransportError).
        """
        self._write_errors[index] = error or TransportError("Mock write failure")

    def set_write_delay(self, seconds: float) -> None:
        """Sleep this long inside every write, to widen race windows in tests."""
        self._write_delay = seconds

    def clear(self) -> None:
        """Clear all written data, call history and pending responses."""
        self._written_data.clear()
        self._responses.clear()
        self._read_buffer.clear()
        self._calls.clear()
        self._deadlines.clear()

    def open(self) -> None:
        """Open the mock transport."""
        self._calls.append("open")
        if self._is_open:
            raise TransportError("Mock transport already open")
        if self._open_error is not None:
            error, self._open_error = self._open_error, None
            raise error
        self._is_open = True

    def close(self) -> None:
        """Close the mock transport."""
        self._calls.append("close")
        if not self._is_open:
            return
        self._is_open = False
        if self._close_error is not None:
            error, self._close_error = self._close_error, None
            raise error

    def set_read_deadline(self, timeout: float | None) -> None:
        """Record a read deadline refresh."""
        self._calls.append("set_read_deadline")
        self._deadlines.append(("read", timeout))

    def set_write_deadline(self, timeout: float | None) -> None:
        """Record a write deadline refresh."""
        self._calls.append("set_write_deadline")
        self._deadlines.append(("write", timeout))

    def write(self, data: bytes) -> None:
        """
        Write data to the mock transport.

        Records the written data and optionally triggers the response
        callback.

        Args:
            data: Bytes to write.

        Raises:
            TransportError: If transport is not open, or a failure was
                scheduled for this write.
        """
        self._calls.append("write")
        if not self._is_open:
            raise TransportError("Mock transport not open")

        index = len(self._written_data)
        if index in self._write_errors:
            raise self._write_errors.pop(index)

        if self._write_delay:
            time.sleep(self._write_delay)

        with self._lock:
            self._written_data.append(bytes(data))
            if self._response_callback:
                response = self._response_callback(bytes(data))
                if response is not None:
                    self._read_buffer.extend(response)

    def read(self, size: int) -> bytes:
        """
        Read exact number of bytes.

        Args:
            size: Number of bytes to read.

        Returns:
            Exactly size bytes.

        Raises:
            TimeoutError: If not enough data is available. Nothing is
                consumed in that case.
            TransportError: If transport is not open.
        """
        self._calls.append("read")
        if not self._is_open:
            raise TransportError("Mock transport not open")

        with self._lock:
            # Load responses into buffer until we have enough
            while len(self._read_buffer) < size and self._responses:
                self._read_buffer.extend(self._responses.popleft())

            if len(self._read_buffer) < size:
                raise TimeoutError(
                    f"Not enough mock data: need {size}, have {len(self._read_buffer)}"
                )

            result = bytes(self._read_buffer[:size])
            del self._read_buffer[:size]
            return result

    def assert_written(self, expected: bytes, index: int = -1) -> None:
        """
        Assert that specific data was written.

        Args:
            expected: Expected bytes.
            index: Index in written_data list (-1 for last).

        Raises:
            AssertionError: If data doesn't match.
        """
        if not self._written_data:
            raise AssertionError("No data written to mock transport")

        actual = self._written_data[index]
        if actual != expected:
            raise AssertionError(f"Written data mismatch: expected {expected!r}, got {actual!r}")

    def assert_write_count(self, expected: int) -> None:
        """
        Assert number of write operations.

        Args:
            expected: Expected number of writes.

        Raises:
            AssertionError: If count doesn't match.
        """
        actual = len(self._written_data)
        if actual != expected:
            raise AssertionError(f"Write count mismatch: expected {expected}, got {actual}")

    def __repr__(self) -> str:
        status = "open" if self._is_open else "closed"
        return f"MockTransport({self._name!r}, {status})"
