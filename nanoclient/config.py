"""
Node client configuration.

Settings are a validated Pydantic model and can be loaded from a JSON file:

    {
        "connection": "tcp://localhost:7077",
        "pool_size": 4,
        "read_write_timeout": 30,
        "connect_timeout": 10
    }

Missing keys take their defaults. A missing file means all defaults.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from nanoclient.protocol.constants import ProtocolConstants
from nanoclient.transport.endpoint import parse_connection_string

# Module logger
logger = logging.getLogger(__name__)


class NodeConfig(BaseModel):
    """
    Connection settings for a node.

    Example:
        >>> config = NodeConfig(connection="tcp://localhost:7077", pool_size=4)
        >>> config.read_write_timeout
        30.0
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    connection: str = ProtocolConstants.DEFAULT_CONNECTION
    pool_size: int = Field(default=1, ge=1, description="Number of sessions in a pool")
    read_write_timeout: float = Field(
        default=ProtocolConstants.DEFAULT_READ_WRITE_TIMEOUT,
        gt=0,
        description="Seconds allowed for each read or write",
    )
    connect_timeout: float = Field(
        default=ProtocolConstants.DEFAULT_CONNECT_TIMEOUT,
        gt=0,
        description="Seconds allowed for the dial",
    )

    @field_validator("connection")
    @classmethod
    def validate_connection(cls, v: str) -> str:
        """Reject connection strings the Session could never dial."""
        _, err = parse_connection_string(v)
        if err is not None:
            raise ValueError(err.message)
        return v

    @classmethod
    def load(cls, path: str | Path) -> NodeConfig:
        """
        Load configuration from a JSON file.

        Args:
            path: Path to the JSON file.

        Returns:
            The parsed configuration, or defaults if the file does not exist.

        Raises:
            pydantic.ValidationError: If the file content is invalid.
        """
        path = Path(path)
        if not path.exists():
            logger.info("No config file found at %s, using defaults", path)
            return cls()
        return cls.model_validate_json(path.read_text(encoding="utf-8"))
