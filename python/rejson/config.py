"""Client configuration loaded from YAML and the environment.

The file defaults to ``~/.config/rejson/config.yaml`` (or ``$REJSON_CONFIG``)
and may set any :class:`ClientConfig` field::

    url: redis://localhost:6379/0
    socket_timeout: 5.0

``$REJSON_URL`` overrides ``url``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml
from redis.connection import Connection, parse_url

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV = "REJSON_CONFIG"
URL_ENV = "REJSON_URL"


def default_config_path() -> Path:
    """Default config path: ~/.config/rejson/config.yaml"""
    return Path(os.environ.get(CONFIG_ENV, "~/.config/rejson/config.yaml")).expanduser()


@dataclass
class ClientConfig:
    url: str | None = None
    host: str = "localhost"
    port: int = 6379
    db: int = 0
    username: str | None = None
    password: str | None = None
    socket_timeout: float | None = None

    def connection_options(self) -> tuple[type, dict[str, Any]]:
        """Return the redis-py connection class and its keyword arguments.

        A ``url`` takes precedence over the discrete host/port/db fields.
        """
        options: dict[str, Any] = {
            "host": self.host,
            "port": self.port,
            "db": self.db,
            "username": self.username,
            "password": self.password,
            "socket_timeout": self.socket_timeout,
            # replies are decoded as RESP2 shapes; a URL query may override
            "protocol": 2,
        }
        connection_class: type = Connection
        if self.url:
            url_options = parse_url(self.url)
            connection_class = url_options.pop("connection_class", Connection)
            if "path" in url_options:
                options.pop("host")
                options.pop("port")
            options.update(url_options)
        return connection_class, options

    @classmethod
    def from_dict(cls, d: dict) -> ClientConfig:
        """Build from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**d)


def load_config(path: str | Path | None = None) -> ClientConfig:
    """Load configuration from a YAML file, then apply environment overrides.

    A missing file yields the defaults.
    """
    config_path = Path(path).expanduser() if path is not None else default_config_path()
    data: dict = {}
    if config_path.is_file():
        logger.debug("Loading config from %s", config_path)
        try:
            parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ConfigError(f"Malformed config file {config_path}: {exc}") from exc
        if parsed is not None:
            if not isinstance(parsed, dict):
                raise ConfigError(f"Config file {config_path} must contain a mapping")
            data = parsed
    config = ClientConfig.from_dict(data)
    url = os.environ.get(URL_ENV)
    if url:
        config.url = url
    return config
