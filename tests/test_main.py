"""Tests for the CLI in main.py; mostly about where each setting ends up coming from."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

import main


@pytest.fixture
def started(monkeypatch) -> list:
    """Configs that would have been served; keeps the CLI from binding a port."""
    configs = []
    monkeypatch.setattr(main, "run_exporter", configs.append)
    return configs


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "exporter.yml"
    path.write_text(
        "modem:\n  address: 10.0.0.1\n  password: from-file\ntelemetry:\n  metrics_path: /file-metrics\n",
        encoding="utf-8",
    )
    return str(path)


def test_defaults(runner, started):
    result = runner.invoke(main.main, ["--modem-password", "foobaz"], env={})

    assert result.exit_code == 0, result.output
    (config,) = started
    assert config.modem_address == "192.168.100.1"
    assert config.modem_username == "admin"
    assert config.modem_password == "foobaz"
    assert config.listen_address == ":9527"
    assert config.metrics_path == "/metrics"


def test_missing_password_is_fatal(runner, started):
    result = runner.invoke(main.main, [], env={"NETGEAR_CM_EXPORTER_MODEM_PASSWORD": ""})

    assert result.exit_code != 0
    assert "password" in result.output
    assert started == []


def test_env_vars(runner, started):
    result = runner.invoke(
        main.main,
        [],
        env={
            "NETGEAR_CM_EXPORTER_MODEM_PASSWORD": "from-env",
            "NETGEAR_CM_EXPORTER_MODEM_STATUS_PATH": "/DocsisStatus.htm",
            "NETGEAR_CM_EXPORTER_TELEMETRY_ADDR": "localhost:9526",
        },
    )

    assert result.exit_code == 0, result.output
    (config,) = started
    assert config.modem_password == "from-env"
    assert config.modem_status_path == "/DocsisStatus.htm"
    assert config.listen_address == "localhost:9526"


def test_file_beats_default(runner, started, config_path):
    result = runner.invoke(main.main, ["--config-file", config_path], env={})

    assert result.exit_code == 0, result.output
    (config,) = started
    assert config.modem_address == "10.0.0.1"
    assert config.modem_password == "from-file"
    assert config.metrics_path == "/file-metrics"
    # not in the file
    assert config.modem_username == "admin"


def test_env_beats_file(runner, started, config_path):
    result = runner.invoke(
        main.main,
        [],
        env={
            "NETGEAR_CM_EXPORTER_CONFIG_FILE": config_path,
            "NETGEAR_CM_EXPORTER_MODEM_ADDRESS": "10.0.0.2",
        },
    )

    assert result.exit_code == 0, result.output
    (config,) = started
    assert config.modem_address == "10.0.0.2"
    assert config.modem_password == "from-file"


def test_flag_beats_env(runner, started, config_path):
    result = runner.invoke(
        main.main,
        ["--config-file", config_path, "--modem-address", "10.0.0.3"],
        env={"NETGEAR_CM_EXPORTER_MODEM_ADDRESS": "10.0.0.2"},
    )

    assert result.exit_code == 0, result.output
    (config,) = started
    assert config.modem_address == "10.0.0.3"


def test_unreadable_config_file(runner, started, tmp_path):
    result = runner.invoke(main.main, ["--config-file", str(tmp_path / "missing.yml")], env={})

    assert result.exit_code != 0
    assert "failed to read config file" in result.output
    assert started == []


def test_log_level_case_insensitive(runner, started):
    result = runner.invoke(main.main, ["--modem-password", "foobaz", "--log-level", "debug"], env={})

    assert result.exit_code == 0, result.output
