"""JSON path addressing for documents stored by the ReJSON module.

A path is a string expression such as ``.``, ``.foo.bar`` or ``.arr[2]``.
The root path ``.`` selects the whole document.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from .errors import InvalidArgument

ROOT = "."

Token = Union[str, int]  # str for object keys, int for array indices

_IDENTIFIER_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")


def _escape_key(key: str) -> str:
    """Escape a key for bracket notation with double quotes."""
    return key.replace("\\", "\\\\").replace('"', '\\"')


@dataclass(frozen=True)
class Path:
    """An immutable JSON path expression.

    Only emptiness is checked here; the server validates the path syntax.
    """

    expression: str

    def __post_init__(self) -> None:
        if not isinstance(self.expression, str) or not self.expression:
            raise InvalidArgument(f"Invalid path expression: {self.expression!r}")

    def __str__(self) -> str:
        return self.expression

    @classmethod
    def root(cls) -> Path:
        """The path selecting the entire document."""
        return ROOT_PATH

    @property
    def is_root(self) -> bool:
        return self.expression == ROOT

    def child(self, token: Token) -> Path:
        """Return the path of a member (str key) or element (int index).

        Identifier-like keys use dot notation, every other key is quoted in
        brackets, indices use ``[i]``.
        """
        base = "" if self.is_root else self.expression
        if isinstance(token, bool) or not isinstance(token, (str, int)):
            raise InvalidArgument(f"Invalid path token: {token!r}")
        if isinstance(token, int):
            return Path(f"{base}[{token}]")
        if _IDENTIFIER_RE.fullmatch(token):
            return Path(f"{base}.{token}")
        return Path(f'{base}["{_escape_key(token)}"]')


ROOT_PATH = Path(ROOT)


def as_path(value: Path | str) -> Path:
    """Coerce a plain string to a Path."""
    if isinstance(value, Path):
        return value
    return Path(value)


def single_optional_path(*paths: Path | str) -> Path:
    """Resolve an optional single path argument.

    No path means root, one path is taken as is, more than one is an error.
    """
    if len(paths) == 0:
        return ROOT_PATH
    if len(paths) == 1:
        return as_path(paths[0])
    raise InvalidArgument("Only a single optional path is allowed")
