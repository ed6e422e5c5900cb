"""JSON value kinds as reported by JSON.TYPE."""

from __future__ import annotations

from enum import Enum

from .errors import UnexpectedReply


class JsonType(Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    OBJECT = "object"
    ARRAY = "array"

    @property
    def python_type(self) -> type:
        """The Python type a decoded value of this kind has."""
        return _PYTHON_TYPES[self]

    @classmethod
    def from_reply(cls, kind: str) -> JsonType:
        """Map a server-reported kind string, rejecting unknown kinds."""
        try:
            return cls(kind)
        except ValueError:
            raise UnexpectedReply(kind, f"Unknown JSON type: {kind}") from None


_PYTHON_TYPES: dict[JsonType, type] = {
    JsonType.NULL: type(None),
    JsonType.BOOLEAN: bool,
    JsonType.INTEGER: int,
    JsonType.NUMBER: float,
    JsonType.STRING: str,
    JsonType.OBJECT: dict,
    JsonType.ARRAY: list,
}
