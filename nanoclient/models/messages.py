"""
Base model for node API messages.

Every request, response and header message is a Pydantic model that declares
its fully-qualified protocol type name as a class attribute. The name is what
the codec uses to resolve the request type code, and what routing layers use
to find a message class from an external path.

Subclasses register themselves by name when they are defined:

    >>> class ReqPing(Message):
    ...     message_name: ClassVar[str] = "nano.api.req_ping"
    ...     id: int = 0
    >>>
    >>> lookup_message("nano.api.req_ping") is ReqPing
    True
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict

_REGISTRY: dict[str, type[Message]] = {}


class Message(BaseModel):
    """
    An opaque serializable message with a discoverable type name.

    Messages are mutable so a pre-allocated response can be populated in
    place by the codec. Unknown fields in decoded data are ignored, which
    keeps older clients readable against newer nodes.

    Attributes:
        message_name: Fully-qualified declared type name, e.g.
            ``"nano.api.req_ping"``. Empty on abstract bases.
    """

    model_config = ConfigDict(extra="ignore", use_enum_values=True)

    message_name: ClassVar[str] = ""

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        if cls.message_name:
            _REGISTRY[cls.message_name] = cls


def message_name(message: Message | type[Message]) -> str:
    """
    Get the declared fully-qualified type name of a message or message class.

    Args:
        message: Message instance or class.

    Returns:
        Declared type name (empty for classes that declare none).
    """
    return message.message_name


def lookup_message(name: str) -> type[Message] | None:
    """
    Find a message class by its declared type name.

    Args:
        name: Fully-qualified type name, e.g. ``"nano.api.res_ping"``.

    Returns:
        The registered class, or None if no message declares that name.
    """
    return _REGISTRY.get(name)


def new_message(name: str) -> Message | None:
    """Construct an empty message by declared type name, or None if unknown."""
    cls = lookup_message(name)
    if cls is None:
        return None
    return cls()


def registered_names() -> list[str]:
    """Sorted list of all registered message type names."""
    return sorted(_REGISTRY)
