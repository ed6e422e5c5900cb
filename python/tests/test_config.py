"""Tests for rejson.config -- YAML and environment configuration."""

import pytest
from redis.connection import Connection, SSLConnection

from rejson.config import ClientConfig, load_config
from rejson.errors import ConfigError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("REJSON_URL", raising=False)
    monkeypatch.delenv("REJSON_CONFIG", raising=False)


def test_missing_file_gives_defaults(tmp_path):
    config = load_config(tmp_path / "absent.yaml")
    assert config == ClientConfig()


def test_load_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("host: cache.internal\nport: 6390\ndb: 4\nsocket_timeout: 2.5\n")
    config = load_config(path)
    assert config.host == "cache.internal"
    assert config.port == 6390
    assert config.db == 4
    assert config.socket_timeout == 2.5


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_config(path) == ClientConfig()


def test_config_env_selects_file(tmp_path, monkeypatch):
    path = tmp_path / "other.yaml"
    path.write_text("port: 7001\n")
    monkeypatch.setenv("REJSON_CONFIG", str(path))
    assert load_config().port == 7001


def test_url_env_overrides(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("url: redis://from-file:6379/0\n")
    monkeypatch.setenv("REJSON_URL", "redis://from-env:6379/1")
    assert load_config(path).url == "redis://from-env:6379/1"


def test_malformed_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("host: [unclosed\n")
    with pytest.raises(ConfigError, match="Malformed"):
        load_config(path)


def test_non_mapping(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(path)


def test_unknown_key(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("hots: typo\n")
    with pytest.raises(ConfigError, match="hots"):
        load_config(path)


class TestConnectionOptions:
    def test_discrete_fields(self):
        cls, options = ClientConfig(host="h", port=1234, password="pw").connection_options()
        assert cls is Connection
        assert options["host"] == "h"
        assert options["port"] == 1234
        assert options["password"] == "pw"
        assert options["protocol"] == 2

    def test_url_wins(self):
        cls, options = ClientConfig(host="h", url="redis://u:p@other:7000/5").connection_options()
        assert cls is Connection
        assert options["host"] == "other"
        assert options["port"] == 7000
        assert options["db"] == 5
        assert options["username"] == "u"
        assert options["password"] == "p"

    def test_tls_url(self):
        cls, _ = ClientConfig(url="rediss://secure:6380/0").connection_options()
        assert cls is SSLConnection
