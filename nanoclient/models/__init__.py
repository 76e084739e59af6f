"""
Message models for the node API.

- ``Message``: base model with a declared type name and a name registry
- Request type enumeration and protocol version
- Request/response header messages
- Request/response payload pairs
"""

from nanoclient.models.api import (
    APIVersion,
    PendingBlock,
    ReqAccountBalance,
    ReqAccountPending,
    ReqBlockCount,
    ReqPing,
    RequestHeader,
    RequestType,
    ResAccountBalance,
    ResAccountPending,
    ResBlockCount,
    ResPing,
    ResponseHeader,
)
from nanoclient.models.messages import (
    Message,
    lookup_message,
    message_name,
    new_message,
    registered_names,
)

__all__ = [
    # Base
    "Message",
    "message_name",
    "lookup_message",
    "new_message",
    "registered_names",
    # Enums
    "RequestType",
    "APIVersion",
    # Headers
    "RequestHeader",
    "ResponseHeader",
    # Payloads
    "ReqPing",
    "ResPing",
    "ReqAccountBalance",
    "ResAccountBalance",
    "ReqAccountPending",
    "ResAccountPending",
    "PendingBlock",
    "ReqBlockCount",
    "ResBlockCount",
]
