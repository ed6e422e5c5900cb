"""Exception hierarchy for the ReJSON client."""

from __future__ import annotations

from typing import Any


class ReJSONError(Exception):
    """Base class for every error raised by this package."""


class ServerError(ReJSONError):
    """The server answered with an error reply."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnexpectedReply(ReJSONError):
    """The reply was well-formed but not the shape or literal expected."""

    def __init__(self, reply: Any, message: str | None = None) -> None:
        super().__init__(message or f"Unexpected reply: {reply!r}")
        self.reply = reply


class DecodeError(ReJSONError, ValueError):
    """A document payload was not valid JSON."""


class InvalidArgument(ReJSONError, ValueError):
    """The caller supplied arguments the command cannot encode."""


class ConfigError(ReJSONError):
    """Configuration file could not be read or parsed."""


class TransactionError(ReJSONError):
    """The set-with-expiry transaction diverged from its expected sequence.

    ``stage`` is the :class:`~rejson.client.TransactionStage` at which the
    divergence was observed.
    """

    def __init__(self, message: str, stage: Any = None) -> None:
        super().__init__(message)
        self.stage = stage


class SetFailed(TransactionError):
    """The committed JSON.SET did not report OK."""


class ExpireFailed(TransactionError):
    """The committed EXPIRE did not apply (key absent)."""
