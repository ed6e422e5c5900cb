"""JsonClient -- the JSON.GET/SET/DEL/TYPE operations."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, NoReturn, Optional

from .commands import (
    Command,
    ExistenceModifier,
    encode_delete,
    encode_get,
    encode_set,
    encode_type,
)
from .config import ClientConfig
from .errors import (
    ExpireFailed,
    InvalidArgument,
    SetFailed,
    TransactionError,
)
from .path import Path
from .protocol import ProtocolConnection
from .replies import (
    IntegerReply,
    MultiBulkReply,
    Reply,
    decode_delete,
    decode_get,
    decode_set,
    decode_type,
    is_ok,
    is_queued,
)
from .types import JsonType

logger = logging.getLogger(__name__)


class TransactionStage(Enum):
    """Steps of the MULTI / JSON.SET / EXPIRE / EXEC sequence."""

    BEGIN = "begin"
    QUEUE_SET = "queue-set"
    QUEUE_EXPIRE = "queue-expire"
    COMMIT = "commit"
    VERIFY = "verify"


class JsonClient:
    """Client for documents stored by the ReJSON module.

    Wraps a :class:`ProtocolConnection` and issues one command per call,
    blocking until the reply is read. A client must not be shared between
    threads without external locking.
    """

    def __init__(self, connection: ProtocolConnection):
        self._conn = connection

    @classmethod
    def from_config(cls, config: Optional[ClientConfig] = None) -> "JsonClient":
        return cls(ProtocolConnection.from_config(config))

    def _call(self, command: Command, args: list, read) -> Reply:
        self._conn.send_command(command, *args)
        return read()

    def get(self, key: str, *paths: Path | str) -> Any:
        """GET a document, or the values at one or more paths.

        With no path the whole document is returned. With several paths the
        server answers with an object keyed by path. Returns None when the
        key does not exist.
        """
        reply = self._call(Command.GET, encode_get(key, *paths), self._conn.read_bulk)
        return decode_get(reply)

    def set(
        self,
        key: str,
        obj: Any,
        *path: Path | str,
        flag: ExistenceModifier = ExistenceModifier.DEFAULT,
    ) -> None:
        """SET a value at an optional single path (default root)."""
        args = encode_set(key, obj, *path, flag=flag)
        reply = self._call(Command.SET, args, self._conn.read_status)
        decode_set(reply)

    def set_with_expiry(
        self,
        key: str,
        obj: Any,
        expiry_seconds: int,
        *path: Path | str,
        flag: ExistenceModifier = ExistenceModifier.DEFAULT,
    ) -> None:
        """SET a value and give the key a time to live, in one transaction.

        Sends MULTI, JSON.SET, EXPIRE and EXEC, checking every reply. A
        failed check raises TransactionError (or SetFailed / ExpireFailed
        for the committed results) and nothing is rolled back; an open
        transaction is left for the caller to discard.
        """
        if isinstance(expiry_seconds, bool) or not isinstance(expiry_seconds, int) or expiry_seconds <= 0:
            raise InvalidArgument(f"Expiry must be a positive number of seconds: {expiry_seconds!r}")
        args = encode_set(key, obj, *path, flag=flag)

        stage = TransactionStage.BEGIN
        reply = self._conn.multi()
        if not is_ok(reply):
            self._diverged(stage, reply)

        stage = TransactionStage.QUEUE_SET
        reply = self._call(Command.SET, args, self._conn.read_status)
        if not is_queued(reply):
            self._diverged(stage, reply)

        stage = TransactionStage.QUEUE_EXPIRE
        reply = self._conn.expire(key, expiry_seconds)
        if not is_queued(reply):
            self._diverged(stage, reply)

        stage = TransactionStage.COMMIT
        reply = self._conn.exec()
        if not isinstance(reply, MultiBulkReply) or len(reply.items) != 2:
            self._diverged(stage, reply)

        stage = TransactionStage.VERIFY
        set_result, expire_result = reply.items
        if not is_ok(set_result):
            logger.warning("JSON.SET of %s failed inside transaction: %r", key, set_result)
            raise SetFailed(f"JSON.SET failed: {set_result!r}", stage)
        if not isinstance(expire_result, IntegerReply) or expire_result.value != 1:
            logger.warning("EXPIRE of %s failed inside transaction: %r", key, expire_result)
            raise ExpireFailed(f"EXPIRE failed: {expire_result!r}", stage)

    @staticmethod
    def _diverged(stage: TransactionStage, reply: Reply) -> NoReturn:
        logger.warning("Transaction diverged at %s: %r", stage.value, reply)
        raise TransactionError(f"Unexpected reply at {stage.value}: {reply!r}", stage)

    def delete(self, key: str, *path: Path | str) -> int:
        """Delete the value at an optional single path (default root).

        Returns the number of paths deleted, 0 or 1.
        """
        reply = self._call(Command.DEL, encode_delete(key, *path), self._conn.read_integer)
        return decode_delete(reply)

    def type(self, key: str, *path: Path | str) -> Optional[JsonType]:
        """Report the JSON kind at an optional single path (default root).

        Returns None when the key does not exist.
        """
        reply = self._call(Command.TYPE, encode_type(key, *path), self._conn.read_bulk)
        return decode_type(reply)

    def connect(self) -> "JsonClient":
        """Open the underlying redis-py connection ahead of the first command."""
        self._conn.connect()
        return self

    def close(self):
        """Disconnect the redis-py connection; a later command reconnects."""
        self._conn.close()

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, *args):
        self.close()
