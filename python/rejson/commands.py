"""Command keywords and argument encoding for the JSON.* commands.

Each ``encode_*`` function returns the ordered argument vector, as bytes,
that follows the command keyword on the wire.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, List

from .path import Path, as_path, single_optional_path


class Command(Enum):
    DEL = "JSON.DEL"
    GET = "JSON.GET"
    SET = "JSON.SET"
    TYPE = "JSON.TYPE"

    @property
    def raw(self) -> bytes:
        return self.value.encode("utf-8")


class ExistenceModifier(Enum):
    """Conditional write flag for JSON.SET. DEFAULT writes unconditionally."""

    DEFAULT = ""
    NOT_EXISTS = "NX"
    MUST_EXIST = "XX"

    @property
    def raw(self) -> bytes:
        return self.value.encode("utf-8")


def _encode(value: str | Path) -> bytes:
    return str(value).encode("utf-8")


def encode_payload(obj: Any) -> str:
    """Serialize a document to JSON text."""
    return json.dumps(obj)


def encode_delete(key: str, *paths: Path | str) -> List[bytes]:
    """JSON.DEL key path"""
    return [_encode(key), _encode(single_optional_path(*paths))]


def encode_get(key: str, *paths: Path | str) -> List[bytes]:
    """JSON.GET key [path ...]

    No path is added when none is given; the server then reads the root.
    """
    args = [_encode(key)]
    for p in paths:
        args.append(_encode(as_path(p)))
    return args


def encode_set(
    key: str,
    obj: Any,
    *paths: Path | str,
    flag: ExistenceModifier = ExistenceModifier.DEFAULT,
) -> List[bytes]:
    """JSON.SET key path json [NX|XX]"""
    args = [
        _encode(key),
        _encode(single_optional_path(*paths)),
        _encode(encode_payload(obj)),
    ]
    if flag is not ExistenceModifier.DEFAULT:
        args.append(flag.raw)
    return args


def encode_type(key: str, *paths: Path | str) -> List[bytes]:
    """JSON.TYPE key path"""
    return [_encode(key), _encode(single_optional_path(*paths))]
