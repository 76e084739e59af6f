"""
Protocol layer for node communication.

This module contains the low-level protocol handling:
- Protocol constants
- Preamble and length-prefix framing
- Message serialization and request type resolution
"""

from nanoclient.protocol.codec import (
    deserialize,
    resolve_request_type,
    resolve_type_name,
    serialize,
)
from nanoclient.protocol.constants import ProtocolConstants
from nanoclient.protocol.framing import (
    build_preamble,
    check_preamble,
    decode_length,
    encode_length,
    frame,
)

__all__ = [
    # Constants
    "ProtocolConstants",
    # Framing
    "build_preamble",
    "check_preamble",
    "encode_length",
    "decode_length",
    "frame",
    # Codec
    "serialize",
    "deserialize",
    "resolve_type_name",
    "resolve_request_type",
]
