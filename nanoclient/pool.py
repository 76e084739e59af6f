"""
Session pool.

A pool is a fixed array of independent Sessions to the same node, handed
out round-robin. Each Session keeps its own lock, so requests on different
sessions run in parallel while requests on the same session serialize.
"""

from __future__ import annotations

import itertools
import logging
import threading
from typing import TYPE_CHECKING, Any

from nanoclient.session import Session

if TYPE_CHECKING:
    from nanoclient.config import NodeConfig
    from nanoclient.exceptions import ProtocolError
    from nanoclient.models.messages import Message

# Module logger
logger = logging.getLogger(__name__)


class SessionPool:
    """
    Round-robin pool of sessions.

    Attributes:
        connection_string: Node address every session connects to.
        sessions: The pooled sessions.
        connected: True when every session is connected.

    Example:
        >>> pool = SessionPool("tcp://localhost:7077", size=4)
        >>> if pool.connect() is None:
        ...     pool.request(ReqPing(id=1), ResPing())
        ...     pool.close()
    """

    def __init__(self, connection_string: str, size: int = 1, **session_kwargs: Any) -> None:
        """
        Initialize a pool of unconnected sessions.

        Args:
            connection_string: ``tcp://host:port`` or ``local:///path``.
            size: Number of sessions.
            **session_kwargs: Passed on to every Session constructor.

        Raises:
            ValueError: If size is less than 1.
        """
        if size < 1:
            raise ValueError(f"Pool size must be at least 1, got {size}")
        self._connection_string = connection_string
        self._sessions = [Session(**session_kwargs) for _ in range(size)]
        self._counter = itertools.count()
        self._counter_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: NodeConfig, **session_kwargs: Any) -> SessionPool:
        """Create a pool from a NodeConfig."""
        return cls(
            config.connection,
            size=config.pool_size,
            read_write_timeout=config.read_write_timeout,
            connect_timeout=config.connect_timeout,
            **session_kwargs,
        )

    @property
    def connection_string(self) -> str:
        """Get the node connection string."""
        return self._connection_string

    @property
    def sessions(self) -> list[Session]:
        """Get the pooled sessions."""
        return list(self._sessions)

    @property
    def connected(self) -> bool:
        """Check if every session is connected."""
        return all(session.connected for session in self._sessions)

    def __len__(self) -> int:
        return len(self._sessions)

    def connect(self) -> ProtocolError | None:
        """
        Connect every session, in order.

        Stops at the first session that fails to connect.

        Returns:
            None if all sessions connected, otherwise the first error.
        """
        for index, session in enumerate(self._sessions):
            err = session.connect(self._connection_string)
            if err is not None:
                logger.warning("Session %d failed to connect: %s", index, err)
                return err
        logger.info("Connected %d sessions to %s", len(self._sessions), self._connection_string)
        return None

    def session(self) -> Session:
        """Get the next session in round-robin order."""
        with self._counter_lock:
            index = next(self._counter) % len(self._sessions)
        return self._sessions[index]

    def request(self, request: Message, response: Message) -> ProtocolError | None:
        """Send a request on the next session. See Session.request."""
        return self.session().request(request, response)

    def close(self) -> ProtocolError | None:
        """
        Close every session.

        Returns:
            None, or the first close error. All sessions are closed
            regardless.
        """
        first_error = None
        for session in self._sessions:
            err = session.close()
            if err is not None and first_error is None:
                first_error = err
        return first_error

    def __enter__(self) -> SessionPool:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        connected = sum(1 for session in self._sessions if session.connected)
        return f"SessionPool({self._connection_string!r}, {connected}/{len(self._sessions)} connected)"
