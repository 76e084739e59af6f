"""
Errors for nanoclient.

Two kinds of error live here:

1. ``ProtocolError`` is a *value*. Every fallible Session operation returns
   one (or ``None``) instead of raising, so a caller handles a failed
   exchange the same way regardless of which step failed.
2. The ``NanoClientError`` hierarchy is raised by transports for low-level
   faults. The Session catches these at its boundary and converts them into
   ``ProtocolError`` values.

The one exception that is allowed to escape a Session call is
``RequestTypeError``: a request message whose declared name does not map to a
known request type means the client code and the message schema disagree.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """Categories carried by ``ProtocolError``."""

    CONNECTION = "Connection"
    """Dial, connection string and close failures."""

    NETWORK = "Network"
    """Post-connect I/O failures, short reads, preamble mismatch, not connected."""

    MARSHALLING = "Marshalling"
    """Encode and decode failures."""

    API = "API"
    """Peer speaks a newer major protocol version."""


@dataclass(frozen=True)
class ProtocolError:
    """
    Outcome of a failed protocol operation.

    The code is non-zero for real errors. Category is optional and is usually
    one of the ``ErrorCategory`` values.

    Example:
        >>> str(ProtocolError(1, "Not connected", "Network"))
        '1:Network:Not connected'
        >>> str(ProtocolError(4, "error_common.invalid_signature"))
        '4:error_common.invalid_signature'
    """

    code: int
    message: str
    category: str = ""

    def __post_init__(self) -> None:
        # Normalize enum categories to their string value
        if isinstance(self.category, ErrorCategory):
            object.__setattr__(self, "category", self.category.value)

    @property
    def is_error(self) -> bool:
        """True for a non-zero code."""
        return self.code != 0

    @classmethod
    def from_exception(
        cls,
        exc: BaseException,
        category: ErrorCategory | str,
        code: int = 1,
    ) -> ProtocolError:
        """Wrap an exception's message in a ProtocolError."""
        return cls(code, str(exc) or type(exc).__name__, category)

    def __str__(self) -> str:
        if self.category:
            return f"{self.code}:{self.category}:{self.message}"
        return f"{self.code}:{self.message}"


class NanoClientError(Exception):
    """
    Base exception for all nanoclient exceptions.

    Allows callers to catch every library-raised exception with one clause.
    """

    pass


class TransportError(NanoClientError):
    """
    Transport-level error.

    Raised for low-level I/O issues:
    - Transport used while not open
    - Socket read/write failures
    - Peer closed the connection before a full frame arrived
    """

    pass


class TimeoutError(NanoClientError):  # noqa: A001 - intentionally shadows builtin
    """
    A read or write deadline expired.

    Raised when a single step does not complete within the configured
    read/write timeout.
    """

    def __init__(
        self,
        message: str = "I/O timeout",
        *,
        timeout_seconds: float | None = None,
    ) -> None:
        super().__init__(message)
        self.timeout_seconds = timeout_seconds

    def __str__(self) -> str:
        base = super().__str__()
        if self.timeout_seconds is not None:
            return f"{base} (after {self.timeout_seconds:.1f}s)"
        return base


class ConnectionError(NanoClientError):  # noqa: A001 - intentionally shadows builtin
    """
    Node connection error.

    Raised when:
    - The node cannot be dialed (refused, unreachable, missing socket file)
    - The dial does not complete within the connect timeout
    """

    pass


class RequestTypeError(NanoClientError, AssertionError):
    """
    A request message does not resolve to a known request type.

    This is a programming error (message schema and client out of sync) and
    is raised instead of returned. It subclasses AssertionError so it is not
    mistaken for a recoverable runtime condition.
    """

    def __init__(self, message_name: str, type_name: str) -> None:
        self.message_name = message_name
        self.type_name = type_name
        super().__init__(f"Invalid request type: {type_name} (message {message_name!r})")
