"""Tests for netgear_cm/config.py."""

from __future__ import annotations

import pytest
from err.exceptions import ConfigError

from netgear_cm.config import ExporterConfig, load_config_file, parse_listen_address


@pytest.fixture
def config_file(tmp_path):
    def _write(content: str):
        path = tmp_path / "config.yml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


class TestLoadConfigFile:
    def test_minimal(self, config_file):
        path = config_file("modem:\n  password: foobaz\n")

        assert load_config_file(path) == {"modem_password": "foobaz"}

    def test_full(self, config_file):
        path = config_file(
            """
modem:
  address: 10.0.0.1:8080
  username: root
  password: foobaz
  status_path: /DocsisStatus.htm
  timeout: 15
telemetry:
  listen_address: "127.0.0.1:9000"
  metrics_path: /scrape
log_level: DEBUG
"""
        )

        assert load_config_file(path) == {
            "modem_address": "10.0.0.1:8080",
            "modem_username": "root",
            "modem_password": "foobaz",
            "modem_status_path": "/DocsisStatus.htm",
            "modem_timeout": 15,
            "telemetry_addr": "127.0.0.1:9000",
            "telemetry_path": "/scrape",
            "log_level": "DEBUG",
        }

    def test_empty_file(self, config_file):
        assert load_config_file(config_file("")) == {}

    def test_unknown_keys_ignored(self, config_file):
        path = config_file("modem:\n  password: foobaz\n  colour: blue\n")

        assert load_config_file(path) == {"modem_password": "foobaz"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="failed to read config file"):
            load_config_file(tmp_path / "nope.yml")

    def test_bad_yaml(self, config_file):
        with pytest.raises(ConfigError, match="unable to parse config YAML"):
            load_config_file(config_file("modem: [unclosed\n"))

    def test_not_a_mapping(self, config_file):
        with pytest.raises(ConfigError):
            load_config_file(config_file("- just\n- a list\n"))

    def test_section_not_a_mapping(self, config_file):
        with pytest.raises(ConfigError, match="'modem'"):
            load_config_file(config_file("modem: 192.168.100.1\n"))


class TestExporterConfig:
    def test_defaults(self):
        config = ExporterConfig(modem_password="foobaz")

        assert config.modem_address == "192.168.100.1"
        assert config.modem_username == "admin"
        assert config.modem_status_path == "/DocsisStatus.asp"
        assert config.modem_timeout is None
        assert config.listen_address == ":9527"
        assert config.metrics_path == "/metrics"
        assert config.modem_base_url == "http://192.168.100.1"

    def test_password_required(self):
        with pytest.raises(ConfigError, match="password"):
            ExporterConfig(modem_password="")

    def test_metrics_path_must_be_absolute(self):
        with pytest.raises(ConfigError):
            ExporterConfig(modem_password="foobaz", metrics_path="metrics")

    def test_bad_listen_address(self):
        with pytest.raises(ConfigError):
            ExporterConfig(modem_password="foobaz", listen_address="nope")


class TestParseListenAddress:
    @pytest.mark.parametrize(
        ("address", "expected"),
        [
            (":9527", (None, 9527)),
            ("localhost:9526", ("localhost", 9526)),
            ("0.0.0.0:80", ("0.0.0.0", 80)),
            ("[::1]:9527", ("::1", 9527)),
        ],
    )
    def test_valid(self, address, expected):
        assert parse_listen_address(address) == expected

    @pytest.mark.parametrize("address", ["9527", "host:", "host:abc", ":0", ":70000"])
    def test_invalid(self, address):
        with pytest.raises(ConfigError):
            parse_listen_address(address)
