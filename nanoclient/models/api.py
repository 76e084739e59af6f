"""
Node API message definitions.

This module mirrors the node's interface description: the request type
enumeration, the protocol version, the header messages exchanged ahead of
every payload, and the request/response payload pairs.

Naming follows the interface description: request payloads are declared as
``nano.api.req_<name>`` and their responses as ``nano.api.res_<name>``. The
request type code for a payload is ``<NAME>`` in ``RequestType``.
"""

from __future__ import annotations

from enum import IntEnum
from typing import ClassVar

from pydantic import BaseModel, Field

from nanoclient.models.messages import Message


class RequestType(IntEnum):
    """Request type codes carried in the request header."""

    INVALID = 0
    """Sentinel for an unset or unknown request type."""

    ACCOUNT_PENDING = 1
    ACCOUNT_BALANCE = 2
    BLOCK_COUNT = 3
    PING = 4


class APIVersion(IntEnum):
    """Protocol version spoken by this client."""

    VERSION_MINOR = 0
    """Minor version. Peers with any minor version are accepted."""

    VERSION_MAJOR = 1
    """Major version. Peers with a newer major version are rejected."""


# ===== Headers =====


class RequestHeader(Message):
    """Control message sent before every request payload."""

    message_name: ClassVar[str] = "nano.api.request"

    type: RequestType = RequestType.INVALID


class ResponseHeader(Message):
    """Control message received before every response payload."""

    message_name: ClassVar[str] = "nano.api.response"

    error_code: int = 0
    error_message: str = ""
    error_category: str = ""


# ===== Ping =====


class ReqPing(Message):
    """Liveness check. The node echoes the id back."""

    message_name: ClassVar[str] = "nano.api.req_ping"

    id: int = 0


class ResPing(Message):
    message_name: ClassVar[str] = "nano.api.res_ping"

    id: int = 0


# ===== Accounts =====


class ReqAccountBalance(Message):
    """Balance query for a single account."""

    message_name: ClassVar[str] = "nano.api.req_account_balance"

    account: str = ""


class ResAccountBalance(Message):
    """
    Account balance.

    Amounts are 128-bit raw values and are carried as decimal strings.
    """

    message_name: ClassVar[str] = "nano.api.res_account_balance"

    balance: str = "0"
    pending: str = "0"


class PendingBlock(BaseModel):
    """One receivable block in an account_pending response."""

    account: str = ""
    hash: str = ""
    amount: str = "0"
    source: str = ""


class ReqAccountPending(Message):
    """Receivable blocks for one or more accounts."""

    message_name: ClassVar[str] = "nano.api.req_account_pending"

    accounts: list[str] = Field(default_factory=list)
    count: int = Field(default=0, ge=0)
    threshold: str = "0"
    source: bool = False


class ResAccountPending(Message):
    message_name: ClassVar[str] = "nano.api.res_account_pending"

    blocks: list[PendingBlock] = Field(default_factory=list)


# ===== Ledger =====


class ReqBlockCount(Message):
    message_name: ClassVar[str] = "nano.api.req_block_count"


class ResBlockCount(Message):
    message_name: ClassVar[str] = "nano.api.res_block_count"

    count: int = 0
    unchecked: int = 0
