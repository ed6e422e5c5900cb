"""Request/reply primitives over a redis-py connection.

redis-py owns the socket and RESP framing. :class:`ProtocolConnection`
adds only what the JSON commands need: send one command, then read one
reply narrowed to the shape the caller expects. Server error replies come
back as :class:`~rejson.replies.ErrorReply`; transport failures raised by
redis-py propagate unchanged.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from redis.connection import AbstractConnection
from redis.exceptions import ResponseError

from .commands import Command
from .config import ClientConfig
from .replies import Reply, from_raw

logger = logging.getLogger(__name__)


class ProtocolConnection:
    """A single redis-py connection used for one request at a time."""

    def __init__(self, connection: AbstractConnection):
        self._conn = connection

    @classmethod
    def from_config(cls, config: Optional[ClientConfig] = None) -> "ProtocolConnection":
        """Create an unconnected connection from a ClientConfig."""
        config = config or ClientConfig()
        connection_class, options = config.connection_options()
        return cls(connection_class(**options))

    @property
    def connection(self) -> AbstractConnection:
        return self._conn

    def connect(self) -> None:
        """Open the socket (redis-py also connects on first send)."""
        logger.debug("Connecting %r", self._conn)
        self._conn.connect()

    def close(self) -> None:
        """Disconnect the redis-py socket, dropping any unread replies."""
        logger.debug("Disconnecting %r", self._conn)
        self._conn.disconnect()

    def send_command(self, name: Command | str, *args: bytes | str) -> None:
        """Send a command keyword followed by its arguments."""
        keyword = name.value if isinstance(name, Command) else name
        logger.debug("Sending %s with %d argument(s)", keyword, len(args))
        self._conn.send_command(keyword, *args)

    def _read(self, status: bool = False) -> Reply:
        try:
            raw: Any = self._conn.read_response()
        except ResponseError as exc:
            return from_raw(exc)
        return from_raw(raw, status=status)

    def read_reply(self) -> Reply:
        """Read one reply of any shape."""
        return self._read()

    def read_status(self) -> Reply:
        """Read a reply expected to be a status string."""
        return self._read(status=True)

    def read_bulk(self) -> Reply:
        """Read a reply expected to be a bulk string."""
        return self._read()

    def read_integer(self) -> Reply:
        """Read a reply expected to be an integer."""
        return self._read()

    def read_multi(self) -> Reply:
        """Read a reply expected to be a multi-bulk array."""
        return self._read()

    def multi(self) -> Reply:
        """Start a transaction and return the status reply."""
        self.send_command("MULTI")
        return self.read_status()

    def expire(self, key: str, seconds: int) -> Reply:
        """Send EXPIRE key seconds and return the status reply.

        Inside a transaction the reply is the queue acknowledgement.
        """
        self.send_command("EXPIRE", key, str(seconds))
        return self.read_status()

    def exec(self) -> Reply:
        """Execute a transaction and return the multi-bulk result."""
        self.send_command("EXEC")
        return self.read_multi()

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, *args):
        self.close()
