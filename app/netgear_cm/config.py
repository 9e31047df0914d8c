"""
Config plumbing.

Values can come from a flag, an env-var or a YAML file; the CLI in main.py sorts out which one wins.
This module only deals with the YAML file and the final, validated config object.

The file looks like:

    modem:
      address: 192.168.100.1
      username: admin
      password: hunter2
      status_path: /DocsisStatus.htm
    telemetry:
      listen_address: ":9527"
      metrics_path: /metrics
"""

from dataclasses import dataclass
from pathlib import Path

import structlog
import yaml
from err.exceptions import ConfigError

from util.const import (
    DEFAULT_LISTEN_ADDRESS,
    DEFAULT_METRICS_PATH,
    DEFAULT_MODEM_ADDRESS,
    DEFAULT_MODEM_USERNAME,
    DEFAULT_STATUS_PATH,
)

log = structlog.get_logger(__name__)

# (section, key in file) -> CLI parameter name
_FILE_KEYS = {
    ("modem", "address"): "modem_address",
    ("modem", "username"): "modem_username",
    ("modem", "password"): "modem_password",
    ("modem", "status_path"): "modem_status_path",
    ("modem", "timeout"): "modem_timeout",
    ("telemetry", "listen_address"): "telemetry_addr",
    ("telemetry", "metrics_path"): "telemetry_path",
}


@dataclass(frozen=True)
class ExporterConfig:
    modem_password: str
    modem_address: str = DEFAULT_MODEM_ADDRESS
    modem_username: str = DEFAULT_MODEM_USERNAME
    modem_status_path: str = DEFAULT_STATUS_PATH
    # None -> leave it to aiohttp's default
    modem_timeout: float | None = None
    listen_address: str = DEFAULT_LISTEN_ADDRESS
    metrics_path: str = DEFAULT_METRICS_PATH

    def __post_init__(self):
        # Password defaults to something printed on the sticker on the bottom of the modem;
        #   impossible to guess so require user provides
        if not self.modem_password:
            raise ConfigError("modem password isn't set")
        if not self.metrics_path.startswith("/"):
            raise ConfigError(f"metrics path must start with '/': {self.metrics_path!r}")
        if not self.modem_status_path.startswith("/"):
            raise ConfigError(
                f"modem status path must start with '/': {self.modem_status_path!r}"
            )
        # Fail now rather than when the server tries to bind
        parse_listen_address(self.listen_address)

    @property
    def modem_base_url(self) -> str:
        return f"http://{self.modem_address}"


def parse_listen_address(address: str) -> tuple[str | None, int]:
    """'host:port' -> (host, port). An empty host (':9527') means all interfaces, returned as None."""
    host, sep, port = address.rpartition(":")
    if not sep:
        raise ConfigError(f"listen address must be host:port, got {address!r}")
    try:
        port_num = int(port)
    except ValueError as e:
        raise ConfigError(f"invalid port in listen address {address!r}") from e
    if not 0 < port_num < 65536:
        raise ConfigError(f"port out of range in listen address {address!r}")
    # [::1]:9527
    host = host.strip("[]")
    return host or None, port_num


def load_config_file(path: str | Path) -> dict[str, object]:
    """Read the YAML config file and flatten it to CLI parameter names.

    Unknown keys are logged and otherwise ignored.
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"failed to read config file: {e}") from e

    try:
        raw = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"unable to parse config YAML: {e}") from e

    # Empty file is fine; just means nothing is set
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("config file must contain a YAML mapping")

    values: dict[str, object] = {}
    for section, section_values in raw.items():
        if section == "log_level":
            values["log_level"] = section_values
            continue
        if section_values is None:
            continue
        if not isinstance(section_values, dict):
            raise ConfigError(f"config section {section!r} must be a mapping")
        for key, value in section_values.items():
            if (param := _FILE_KEYS.get((section, key))) is None:
                log.warning("Ignoring unknown config key", section=section, key=key)
                continue
            values[param] = value

    return values
