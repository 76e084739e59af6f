"""
Node protocol constants.

Values shared by the codec, the framing helpers, the transports and the
Session. Protocol version numbers live with the API definitions in
``nanoclient.models.api.APIVersion``.
"""

from __future__ import annotations

from typing import Final


class ProtocolConstants:
    """Protocol constants for the node wire protocol."""

    # ===== Preamble =====

    PREAMBLE_LEAD: Final[int] = ord("N")
    """Magic lead byte of every request and response preamble."""

    ENCODING: Final[int] = 0
    """
    Payload encoding identifier carried in preamble byte 1.

    Nodes read encoding 0 as protobuf, but this client encodes every header
    and payload as a msgpack map. It only interoperates with nodes that
    decode msgpack under encoding 0, not with protobuf-only nodes.
    """

    PREAMBLE_SIZE: Final[int] = 4
    """Preamble length: lead, encoding, major version, minor version."""

    # ===== Framing =====

    LENGTH_PREFIX_SIZE: Final[int] = 4
    """Size of the big-endian unsigned frame length prefix."""

    LENGTH_PREFIX_FORMAT: Final[str] = ">I"
    """struct format of the frame length prefix."""

    MAX_FRAME_LENGTH: Final[int] = 0xFFFFFFFF
    """Largest length a frame prefix can express."""

    RECV_CHUNK_SIZE: Final[int] = 64 * 1024
    """Most bytes requested from the socket per receive call."""

    # ===== Message Names =====

    REQUEST_NAME_PREFIX: Final[str] = "nano.api.req_"
    """Prefix stripped from a request's declared name to find its type code."""

    RESPONSE_NAME_PREFIX: Final[str] = "nano.api.res_"
    """Prefix of response message names."""

    # ===== Timeouts =====

    DEFAULT_READ_WRITE_TIMEOUT: Final[float] = 30.0
    """Seconds each individual read or write may take."""

    DEFAULT_CONNECT_TIMEOUT: Final[float] = 10.0
    """Seconds a dial may take."""

    KEEPALIVE_INTERVAL: Final[int] = 30
    """TCP keep-alive probe interval in seconds."""

    # ===== Connection Strings =====

    SCHEME_TCP: Final[str] = "tcp"
    SCHEME_LOCAL: Final[str] = "local"

    DEFAULT_CONNECTION: Final[str] = "local:///tmp/nano"
    """Connection string used when none is configured."""
