"""rejson -- client for JSON documents stored by the ReJSON Redis module."""

from .client import JsonClient, TransactionStage
from .commands import Command, ExistenceModifier
from .config import ClientConfig, load_config
from .errors import (
    ConfigError,
    DecodeError,
    ExpireFailed,
    InvalidArgument,
    ReJSONError,
    ServerError,
    SetFailed,
    TransactionError,
    UnexpectedReply,
)
from .path import ROOT_PATH, Path
from .protocol import ProtocolConnection
from .types import JsonType

# Module-level convenience instance (connects lazily)
_default_client: JsonClient = None


def _get_client() -> JsonClient:
    global _default_client
    if _default_client is None:
        _default_client = JsonClient.from_config(load_config())
    return _default_client


def get(key: str, *paths):
    """GET a document or the values at the given paths."""
    return _get_client().get(key, *paths)


def set(key: str, obj, *path, flag: ExistenceModifier = ExistenceModifier.DEFAULT):
    """SET a value at an optional single path."""
    return _get_client().set(key, obj, *path, flag=flag)


def set_with_expiry(key: str, obj, expiry_seconds: int, *path,
                    flag: ExistenceModifier = ExistenceModifier.DEFAULT):
    """SET a value and expire the key after expiry_seconds."""
    return _get_client().set_with_expiry(key, obj, expiry_seconds, *path, flag=flag)


def delete(key: str, *path) -> int:
    """Delete the value at an optional single path."""
    return _get_client().delete(key, *path)


def type(key: str, *path):
    """Report the JSON kind at an optional single path."""
    return _get_client().type(key, *path)


def connect(url: str = None) -> JsonClient:
    """Create and return a connected client."""
    global _default_client
    config = load_config()
    if url is not None:
        config.url = url
    _default_client = JsonClient.from_config(config)
    _default_client.connect()
    return _default_client


__all__ = [
    'JsonClient', 'TransactionStage', 'ProtocolConnection',
    'Command', 'ExistenceModifier', 'JsonType', 'Path', 'ROOT_PATH',
    'ClientConfig', 'load_config',
    'ReJSONError', 'ServerError', 'UnexpectedReply', 'DecodeError',
    'InvalidArgument', 'ConfigError', 'TransactionError', 'SetFailed',
    'ExpireFailed',
    'get', 'set', 'set_with_expiry', 'delete', 'type', 'connect',
]
