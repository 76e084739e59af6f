"""
Connection string parsing.

Two forms are understood:

- ``tcp://host:port``      stream socket to host:port
- ``local:///path/to/sock`` local domain socket; the path is the URI path,
  not its host
"""

from __future__ import annotations

from typing import Literal
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field

from nanoclient.exceptions import ErrorCategory, ProtocolError
from nanoclient.protocol.constants import ProtocolConstants


class Endpoint(BaseModel):
    """
    Parsed node address.

    Example:
        >>> endpoint, err = parse_connection_string("tcp://localhost:7077")
        >>> endpoint.address
        ('localhost', 7077)
    """

    model_config = ConfigDict(frozen=True)

    scheme: Literal["tcp", "local"]
    host: str = ""
    port: int = Field(default=0, ge=0, le=65535)
    path: str = ""

    @property
    def is_local(self) -> bool:
        """True for local domain socket endpoints."""
        return self.scheme == ProtocolConstants.SCHEME_LOCAL

    @property
    def address(self) -> str | tuple[str, int]:
        """Socket address: a filesystem path or a (host, port) pair."""
        if self.is_local:
            return self.path
        return (self.host, self.port)

    def __str__(self) -> str:
        if self.is_local:
            return f"local://{self.path}"
        return f"tcp://{self.host}:{self.port}"


def parse_connection_string(connection_string: str) -> tuple[Endpoint | None, ProtocolError | None]:
    """
    Parse a node connection string.

    Args:
        connection_string: ``tcp://host:port`` or ``local:///path``.

    Returns:
        Tuple of (endpoint, error):
        - On success: (Endpoint, None)
        - On failure: (None, Connection error)
    """
    invalid = ProtocolError(1, "Invalid connection string", ErrorCategory.CONNECTION)

    try:
        uri = urlsplit(connection_string)
        port = uri.port
    except ValueError:
        return None, invalid

    if uri.scheme == ProtocolConstants.SCHEME_LOCAL:
        if not uri.path:
            return None, invalid
        return Endpoint(scheme="local", path=uri.path), None

    if uri.scheme != ProtocolConstants.SCHEME_TCP:
        return None, ProtocolError(1, "Invalid schema: Use tcp or local.", ErrorCategory.CONNECTION)

    if not uri.hostname or port is None:
        return None, invalid
    return Endpoint(scheme="tcp", host=uri.hostname, port=port), None
