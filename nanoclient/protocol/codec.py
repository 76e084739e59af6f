"""
Wire codec for node API messages.

Messages are encoded as a msgpack map of their fields, in declaration order,
so the same message always produces the same bytes. Decoding validates the
map against the target's model before any field is touched.

Serialization failures are reported as ``Marshalling`` ProtocolErrors, in the
same (result, error) style the Session uses for every step. Resolving a
request type is different: an unknown type name is a client/schema mismatch
and raises ``RequestTypeError``.
"""

from __future__ import annotations

import logging

import msgpack
from msgpack.exceptions import UnpackException
from pydantic import ValidationError

from nanoclient.exceptions import ErrorCategory, ProtocolError, RequestTypeError
from nanoclient.models.api import RequestType
from nanoclient.models.messages import Message
from nanoclient.protocol.constants import ProtocolConstants

# Module logger
logger = logging.getLogger(__name__)


def serialize(message: Message) -> tuple[bytes, ProtocolError | None]:
    """
    Encode a message.

    Args:
        message: Message to encode.

    Returns:
        Tuple of (data, error):
        - On success: (encoded bytes, None)
        - On failure: (b"", Marshalling error)

    Example:
        >>> data, err = serialize(ReqPing(id=1000))
        >>> err is None
        True
    """
    try:
        data = msgpack.packb(message.model_dump(mode="python"), use_bin_type=True)
    except (TypeError, ValueError, OverflowError) as e:
        return b"", ProtocolError.from_exception(e, ErrorCategory.MARSHALLING)
    return data, None


def deserialize(data: bytes, target: Message) -> ProtocolError | None:
    """
    Decode bytes into a pre-allocated message.

    The data is decoded and validated against the target's model first; the
    target is only modified if that succeeds.

    Args:
        data: Encoded message bytes.
        target: Message instance to populate in place.

    Returns:
        None on success, otherwise a Marshalling error describing why the
        data could not be decoded.
    """
    try:
        payload = msgpack.unpackb(data, raw=False)
    except (UnpackException, ValueError, TypeError) as e:
        return ProtocolError.from_exception(e, ErrorCategory.MARSHALLING)

    if not isinstance(payload, dict):
        return ProtocolError(
            1,
            f"Expected a map for {target.message_name or type(target).__name__}, "
            f"got {type(payload).__name__}",
            ErrorCategory.MARSHALLING,
        )

    try:
        decoded = type(target).model_validate(payload)
    except ValidationError as e:
        return ProtocolError(1, str(e), ErrorCategory.MARSHALLING)

    for name in type(target).model_fields:
        setattr(target, name, getattr(decoded, name))
    return None


def resolve_type_name(message: Message) -> str:
    """
    Derive the request type identifier from a message's declared name.

    The fixed request prefix is stripped and the remainder upper-cased.

    Example:
        >>> resolve_type_name(ReqAccountPending())
        'ACCOUNT_PENDING'
    """
    return message.message_name.replace(ProtocolConstants.REQUEST_NAME_PREFIX, "", 1).upper()


def resolve_request_type(message: Message) -> RequestType:
    """
    Resolve the request type code for a request message.

    Args:
        message: Request payload message.

    Returns:
        The matching RequestType member.

    Raises:
        RequestTypeError: If the identifier is not a RequestType member, or
            resolves to RequestType.INVALID.
    """
    type_name = resolve_type_name(message)
    request_type = RequestType.__members__.get(type_name, RequestType.INVALID)
    if request_type == RequestType.INVALID:
        logger.error("Invalid request type: %s", type_name)
        raise RequestTypeError(message.message_name, type_name)
    return request_type
