"""Typed protocol replies and per-command decoding.

redis-py hands back parsed replies as bytes, ints, lists, ``None`` or a
``ResponseError`` instance. :func:`from_raw` narrows those into the tagged
union below so each command decodes exactly the shape it expects.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union

from redis.exceptions import ResponseError

from .errors import DecodeError, ServerError, UnexpectedReply
from .types import JsonType

OK = "OK"
QUEUED = "QUEUED"
ERROR_PREFIX = "-ERR"
ERROR_PREFIX_WIDTH = 5  # "-ERR "


@dataclass(frozen=True)
class StatusReply:
    text: str


@dataclass(frozen=True)
class BulkReply:
    text: Optional[str]  # None for a nil bulk


@dataclass(frozen=True)
class IntegerReply:
    value: int


@dataclass(frozen=True)
class MultiBulkReply:
    items: Tuple["Reply", ...]


@dataclass(frozen=True)
class ErrorReply:
    message: str


Reply = Union[StatusReply, BulkReply, IntegerReply, MultiBulkReply, ErrorReply]


def _text(raw: bytes | str) -> str:
    if isinstance(raw, bytes):
        return raw.decode("utf-8")
    return raw


def from_raw(raw: Any, status: bool = False) -> Reply:
    """Narrow a redis-py parsed reply into a :data:`Reply`.

    Strings become :class:`StatusReply` when ``status`` is set, otherwise
    :class:`BulkReply`. Elements of an array are always bulk strings.
    """
    if isinstance(raw, ResponseError):
        return ErrorReply(str(raw))
    if raw is None:
        return BulkReply(None)
    if isinstance(raw, bool):
        raise UnexpectedReply(raw)
    if isinstance(raw, int):
        return IntegerReply(raw)
    if isinstance(raw, (bytes, str)):
        text = _text(raw)
        return StatusReply(text) if status else BulkReply(text)
    if isinstance(raw, (list, tuple)):
        return MultiBulkReply(tuple(from_raw(item) for item in raw))
    raise UnexpectedReply(raw)


def check_error(reply: Reply) -> Reply:
    """Raise ServerError if the reply carries an error, else return it."""
    if isinstance(reply, ErrorReply):
        raise ServerError(reply.message)
    if isinstance(reply, (StatusReply, BulkReply)) and reply.text is not None:
        if reply.text.startswith(ERROR_PREFIX):
            raise ServerError(reply.text[ERROR_PREFIX_WIDTH:])
    return reply


def is_ok(reply: Reply) -> bool:
    """True for a status or bulk reply whose text is exactly OK."""
    return isinstance(reply, (StatusReply, BulkReply)) and reply.text == OK


def is_queued(reply: Reply) -> bool:
    return isinstance(reply, StatusReply) and reply.text == QUEUED


def decode_document(text: str) -> Any:
    """Parse JSON text into dicts, lists and scalars."""
    try:
        return json.loads(text)
    except ValueError as exc:
        raise DecodeError(f"Malformed JSON reply: {exc}") from exc


def decode_get(reply: Reply) -> Any:
    check_error(reply)
    if not isinstance(reply, BulkReply):
        raise UnexpectedReply(reply)
    if reply.text is None:
        return None
    return decode_document(reply.text)


def decode_set(reply: Reply) -> None:
    check_error(reply)
    if not is_ok(reply):
        raise UnexpectedReply(reply)


def decode_delete(reply: Reply) -> int:
    check_error(reply)
    if not isinstance(reply, IntegerReply):
        raise UnexpectedReply(reply)
    return reply.value


def decode_type(reply: Reply) -> Optional[JsonType]:
    """Map a JSON.TYPE reply to a JsonType; a missing key gives None."""
    check_error(reply)
    if not isinstance(reply, BulkReply):
        raise UnexpectedReply(reply)
    if reply.text is None:
        return None
    return JsonType.from_reply(reply.text)
