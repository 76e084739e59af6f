"""Tests for NodeConfig."""

import json
import logging

import pytest
from pydantic import ValidationError

from nanoclient import NodeConfig


class TestNodeConfig:
    """Tests for NodeConfig."""

    def test_defaults(self):
        """Test default settings."""
        config = NodeConfig()
        assert config.connection == "local:///tmp/nano"
        assert config.pool_size == 1
        assert config.read_write_timeout == 30.0
        assert config.connect_timeout == 10.0

    def test_load(self, tmp_path):
        """Test loading a JSON file; missing keys keep their defaults."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"connection": "tcp://[::1]:7077", "pool_size": 4}))
        config = NodeConfig.load(path)
        assert config.connection == "tcp://[::1]:7077"
        assert config.pool_size == 4
        assert config.connect_timeout == 10.0

    def test_load_missing_file(self, tmp_path, caplog):
        """Test a missing file yields defaults."""
        caplog.set_level(logging.INFO, logger="nanoclient.config")
        config = NodeConfig.load(tmp_path / "absent.json")
        assert config == NodeConfig()
        assert "No config file found" in caplog.text

    def test_load_invalid_json(self, tmp_path):
        """Test malformed JSON is a validation error."""
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ValidationError):
            NodeConfig.load(path)

    @pytest.mark.parametrize(
        "settings",
        [
            {"connection": "http://localhost:7077"},
            {"connection": "tcp://localhost"},
            {"pool_size": 0},
            {"read_write_timeout": 0},
            {"connect_timeout": -1},
            {"poolsize": 4},
        ],
    )
    def test_invalid(self, settings):
        """Test settings the client could not use are rejected."""
        with pytest.raises(ValidationError):
            NodeConfig(**settings)

    def test_frozen(self):
        """Test settings are immutable."""
        config = NodeConfig()
        with pytest.raises(ValidationError):
            config.pool_size = 2
