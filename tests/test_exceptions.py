"""Tests for ProtocolError and the exception hierarchy."""

import pytest

from nanoclient.exceptions import (
    ConnectionError,
    ErrorCategory,
    NanoClientError,
    ProtocolError,
    RequestTypeError,
    TimeoutError,
    TransportError,
)


class TestProtocolError:
    """Tests for the ProtocolError value."""

    def test_render_with_category(self):
        """Test rendering includes the category when set."""
        err = ProtocolError(1, "Not connected", "Network")
        assert str(err) == "1:Network:Not connected"

    def test_render_without_category(self):
        """Test rendering omits an empty category."""
        err = ProtocolError(4, "error_common.invalid_signature")
        assert str(err) == "4:error_common.invalid_signature"

    def test_enum_category_normalized(self):
        """Test that an ErrorCategory is stored as its string value."""
        err = ProtocolError(1, "Invalid preamble", ErrorCategory.NETWORK)
        assert err.category == "Network"
        assert err == ProtocolError(1, "Invalid preamble", "Network")

    def test_is_error(self):
        """Test that only non-zero codes are errors."""
        assert ProtocolError(1, "x").is_error is True
        assert ProtocolError(0, "").is_error is False

    def test_from_exception(self):
        """Test wrapping an exception message."""
        err = ProtocolError.from_exception(TransportError("broken pipe"), ErrorCategory.NETWORK)
        assert err == ProtocolError(1, "broken pipe", "Network")

    def test_from_exception_without_message(self):
        """Test that an empty exception message falls back to the type name."""
        err = ProtocolError.from_exception(ValueError(), ErrorCategory.MARSHALLING)
        assert err.message == "ValueError"

    def test_immutable(self):
        """Test that ProtocolError is frozen."""
        err = ProtocolError(1, "x")
        with pytest.raises(AttributeError):
            err.code = 2


class TestExceptionHierarchy:
    """Tests for raised exceptions."""

    @pytest.mark.parametrize("exc_type", [TransportError, TimeoutError, ConnectionError, RequestTypeError])
    def test_all_inherit_base(self, exc_type):
        """Test that every library exception is a NanoClientError."""
        assert issubclass(exc_type, NanoClientError)

    def test_timeout_str_with_seconds(self):
        """Test timeout message includes the duration."""
        assert str(TimeoutError("read", timeout_seconds=2.0)) == "read (after 2.0s)"

    def test_request_type_error_is_assertion(self):
        """Test that the fatal type error is an AssertionError."""
        err = RequestTypeError("nano.api.req_bogus", "BOGUS")
        assert isinstance(err, AssertionError)
        assert "BOGUS" in str(err)
        assert err.message_name == "nano.api.req_bogus"
