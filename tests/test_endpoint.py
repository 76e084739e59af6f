"""Tests for connection string parsing."""

import pytest
from pydantic import ValidationError

from nanoclient.transport import Endpoint, parse_connection_string


class TestParseConnectionString:
    """Tests for parse_connection_string."""

    def test_tcp(self):
        """Test a tcp host:port string."""
        endpoint, err = parse_connection_string("tcp://localhost:7077")
        assert err is None
        assert endpoint == Endpoint(scheme="tcp", host="localhost", port=7077)
        assert endpoint.address == ("localhost", 7077)
        assert not endpoint.is_local

    def test_tcp_ip(self):
        """Test a tcp IPv4 address."""
        endpoint, err = parse_connection_string("tcp://127.0.0.1:1")
        assert err is None
        assert endpoint.address == ("127.0.0.1", 1)

    def test_local(self):
        """Test the path of a local string is the URI path."""
        endpoint, err = parse_connection_string("local:///tmp/nano")
        assert err is None
        assert endpoint.is_local
        assert endpoint.address == "/tmp/nano"
        assert endpoint.host == ""

    def test_str_round_trip(self):
        """Test rendering an endpoint back to its connection string."""
        for connection in ("tcp://node.test:7077", "local:///var/run/node.sock"):
            endpoint, _ = parse_connection_string(connection)
            assert str(endpoint) == connection

    @pytest.mark.parametrize("connection", ["http://localhost:7077", "udp://h:1", "", "/tmp/nano"])
    def test_invalid_scheme(self, connection):
        """Test unknown schemes are rejected with the schema message."""
        endpoint, err = parse_connection_string(connection)
        assert endpoint is None
        assert str(err) == "1:Connection:Invalid schema: Use tcp or local."

    @pytest.mark.parametrize(
        "connection",
        [
            "tcp://localhost",
            "tcp://localhost:notaport",
            "tcp://localhost:70000",
            "tcp://:7077",
            "local://",
        ],
    )
    def test_invalid_address(self, connection):
        """Test malformed addresses are Connection errors."""
        endpoint, err = parse_connection_string(connection)
        assert endpoint is None
        assert err.category == "Connection"
        assert err.message == "Invalid connection string"

    def test_endpoint_frozen(self):
        """Test endpoints are immutable."""
        endpoint, _ = parse_connection_string("tcp://localhost:7077")
        with pytest.raises(ValidationError):
            endpoint.port = 1
