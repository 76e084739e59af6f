"""
Node protocol framing.

Every exchange is a fixed sequence of units on the stream:

    Request preamble:  [ 'N' , 0x00 , verMajor , verMinor ]         (4 bytes)
    Request header:    [ length:u32 ][ header-message bytes ]
    Request payload:   [ length:u32 ][ payload-message bytes ]
    Response preamble: [ 'N' , 0x00 , peerVerMajor , peerVerMinor ]  (4 bytes)
    Response header:   [ length:u32 ][ header-message bytes ]
    Response payload:  [ length:u32 ][ payload-message bytes ]

All lengths are big-endian unsigned 32-bit integers and count only the
message bytes that follow, not the prefix itself.

The helpers here are pure; reading and writing is the Session's job.
"""

from __future__ import annotations

import struct

from nanoclient.exceptions import ErrorCategory, ProtocolError
from nanoclient.models.api import APIVersion
from nanoclient.protocol.constants import ProtocolConstants


def build_preamble(
    major: int = APIVersion.VERSION_MAJOR,
    minor: int = APIVersion.VERSION_MINOR,
) -> bytes:
    """
    Build a 4-byte preamble.

    Args:
        major: Protocol major version (0-255).
        minor: Protocol minor version (0-255).

    Returns:
        ``[PREAMBLE_LEAD, ENCODING, major, minor]``.

    Example:
        >>> build_preamble(1, 0)
        b'N\\x00\\x01\\x00'
    """
    return bytes([ProtocolConstants.PREAMBLE_LEAD, ProtocolConstants.ENCODING, major, minor])


def check_preamble(
    preamble: bytes,
    supported_major: int = APIVersion.VERSION_MAJOR,
) -> ProtocolError | None:
    """
    Validate a preamble received from the node.

    The lead byte and encoding must match exactly. The peer's major version
    must not be newer than ours. The minor version is not checked since
    minor versions are backward compatible.

    Args:
        preamble: The 4 bytes read from the stream.
        supported_major: Highest major version this client understands.

    Returns:
        None if the preamble is acceptable, otherwise a Network error for a
        malformed preamble or an API error for an unsupported version.
    """
    if len(preamble) != ProtocolConstants.PREAMBLE_SIZE:
        return ProtocolError(1, "Invalid preamble", ErrorCategory.NETWORK)

    if preamble[0] != ProtocolConstants.PREAMBLE_LEAD or preamble[1] != ProtocolConstants.ENCODING:
        return ProtocolError(1, "Invalid preamble", ErrorCategory.NETWORK)

    if preamble[2] > supported_major:
        return ProtocolError(1, "Unsupported API version", ErrorCategory.API)

    return None


def encode_length(length: int) -> bytes:
    """
    Encode a frame length prefix.

    Args:
        length: Number of message bytes in the frame.

    Returns:
        4-byte big-endian length.

    Raises:
        ValueError: If length does not fit in an unsigned 32-bit integer.
    """
    if not 0 <= length <= ProtocolConstants.MAX_FRAME_LENGTH:
        raise ValueError(f"Frame length must be 0-{ProtocolConstants.MAX_FRAME_LENGTH}, got {length}")
    return struct.pack(ProtocolConstants.LENGTH_PREFIX_FORMAT, length)


def decode_length(prefix: bytes) -> int:
    """
    Decode a frame length prefix.

    Args:
        prefix: Exactly 4 bytes.

    Returns:
        The frame length.

    Raises:
        ValueError: If prefix is not 4 bytes long.
    """
    if len(prefix) != ProtocolConstants.LENGTH_PREFIX_SIZE:
        raise ValueError(
            f"Expected {ProtocolConstants.LENGTH_PREFIX_SIZE} length bytes, got {len(prefix)}"
        )
    (length,) = struct.unpack(ProtocolConstants.LENGTH_PREFIX_FORMAT, prefix)
    return length


def frame(data: bytes) -> bytes:
    """Prefix data with its encoded length."""
    return encode_length(len(data)) + data
