"""Tests for message models and the name registry."""

from typing import ClassVar

import pytest

from nanoclient.models import (
    APIVersion,
    Message,
    PendingBlock,
    ReqAccountPending,
    ReqPing,
    RequestHeader,
    RequestType,
    ResPing,
    lookup_message,
    message_name,
    new_message,
    registered_names,
)
from nanoclient.protocol import ProtocolConstants


class TestMessageRegistry:
    """Tests for name-based message lookup."""

    def test_lookup_request(self):
        """Test looking up a request class by declared name."""
        assert lookup_message("nano.api.req_ping") is ReqPing

    def test_lookup_response(self):
        """Test looking up a response class by declared name."""
        assert lookup_message("nano.api.res_ping") is ResPing

    def test_lookup_unknown(self):
        """Test that unknown names return None."""
        assert lookup_message("nano.api.req_nothing") is None

    def test_new_message(self):
        """Test constructing an empty message by name."""
        msg = new_message("nano.api.req_account_pending")
        assert isinstance(msg, ReqAccountPending)
        assert msg.accounts == []

    def test_new_message_unknown(self):
        """Test that unknown names construct nothing."""
        assert new_message("nano.api.res_nothing") is None

    def test_subclass_registers_itself(self):
        """Test that defining a named subclass registers it."""

        class ReqCustomProbe(Message):
            message_name: ClassVar[str] = "test.req_custom_probe"

        assert lookup_message("test.req_custom_probe") is ReqCustomProbe
        assert "test.req_custom_probe" in registered_names()

    @pytest.mark.parametrize(
        "request_type", [t for t in RequestType if t != RequestType.INVALID]
    )
    def test_every_request_type_has_request_and_response(self, request_type):
        """Test each request type code has a paired req_/res_ message."""
        suffix = request_type.name.lower()
        request_cls = lookup_message(ProtocolConstants.REQUEST_NAME_PREFIX + suffix)
        response_cls = lookup_message(ProtocolConstants.RESPONSE_NAME_PREFIX + suffix)
        assert request_cls is not None
        assert response_cls is not None
        assert request_cls is not response_cls

    def test_base_not_registered(self):
        """Test that the unnamed base is not registered."""
        assert "" not in registered_names()

    def test_message_name_of_instance_and_class(self):
        """Test reading declared names."""
        assert message_name(ReqPing(id=1)) == "nano.api.req_ping"
        assert message_name(ReqPing) == "nano.api.req_ping"


class TestMessages:
    """Tests for message behavior."""

    def test_defaults(self):
        """Test default field values."""
        assert ReqPing().id == 0
        assert RequestHeader().type == RequestType.INVALID

    def test_enum_stored_as_value(self):
        """Test that enum fields hold plain ints after validation."""
        header = RequestHeader(type=RequestType.PING)
        assert header.type == 4
        assert header.model_dump() == {"type": 4}

    def test_mutable_for_in_place_population(self):
        """Test that messages accept assignment."""
        pong = ResPing()
        pong.id = 1000
        assert pong.id == 1000

    def test_nested_models(self):
        """Test nested model validation from dicts."""
        msg = ReqAccountPending.model_validate(
            {"accounts": ["nano_1abc"], "count": 2, "threshold": "1", "source": True}
        )
        assert msg.accounts == ["nano_1abc"]
        assert msg.source is True

    def test_pending_block(self):
        """Test pending block defaults."""
        assert PendingBlock().amount == "0"

    def test_api_version(self):
        """Test supported protocol version."""
        assert APIVersion.VERSION_MAJOR == 1
        assert APIVersion.VERSION_MINOR == 0
