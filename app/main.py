#!/usr/bin/env python3
"""
Main / entry point for the Netgear cable modem exporter.

"""
import click
import structlog
from aiohttp import web
from err.exceptions import ConfigError
from netgear_cm.config import ExporterConfig, load_config_file, parse_listen_address
from netgear_cm.server import build_app
from util.const import (
    DEFAULT_LISTEN_ADDRESS,
    DEFAULT_METRICS_PATH,
    DEFAULT_MODEM_ADDRESS,
    DEFAULT_MODEM_USERNAME,
    DEFAULT_STATUS_PATH,
    ENV_PREFIX,
    LogLevel,
)

log = structlog.get_logger(__name__)


def configure_logging(log_level: LogLevel) -> None:
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(log_level.value)
    )


def _load_config_file(ctx: click.Context, param: click.Parameter, value):
    """Eager callback; whatever is in the file becomes the default for the remaining options.

    click resolves flag > env-var > default_map > default on its own, so this is all it takes
    to slot the file in between env-vars and the built-in defaults.
    """
    if value is None:
        return value
    try:
        file_values = load_config_file(value)
    except ConfigError as e:
        raise click.BadParameter(str(e), ctx=ctx, param=param) from e
    ctx.default_map = {**(ctx.default_map or {}), **file_values}
    return value


def _env(name: str) -> str:
    return f"{ENV_PREFIX}_{name}"


def run_exporter(config: ExporterConfig) -> None:
    host, port = parse_listen_address(config.listen_address)
    log.info(
        "Metrics server starting",
        host=host or "0.0.0.0",
        port=port,
        path=config.metrics_path,
    )
    # print=None: we do our own logging
    web.run_app(build_app(config), host=host, port=port, print=None)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config-file",
    type=click.Path(dir_okay=False),
    envvar=_env("CONFIG_FILE"),
    is_eager=True,
    expose_value=False,
    callback=_load_config_file,
    help="Path to YAML configuration file. (optional)",
)
@click.option(
    "--modem-address",
    envvar=_env("MODEM_ADDRESS"),
    default=DEFAULT_MODEM_ADDRESS,
    show_default=True,
    help="Cable modem admin address and (optional) port.",
)
@click.option(
    "--modem-username",
    envvar=_env("MODEM_USERNAME"),
    default=DEFAULT_MODEM_USERNAME,
    show_default=True,
    help="Modem admin username.",
)
@click.option(
    "--modem-password",
    envvar=_env("MODEM_PASSWORD"),
    default=None,
    help="Modem admin password. (required)",
)
@click.option(
    "--modem-status-path",
    envvar=_env("MODEM_STATUS_PATH"),
    default=DEFAULT_STATUS_PATH,
    show_default=True,
    help="Path of the DOCSIS status page; some firmware uses /DocsisStatus.htm.",
)
@click.option(
    "--modem-timeout",
    envvar=_env("MODEM_TIMEOUT"),
    type=float,
    default=None,
    help="Seconds to wait on the modem before giving up. Defaults to aiohttp's own timeout.",
)
@click.option(
    "--telemetry-addr",
    envvar=_env("TELEMETRY_ADDR"),
    default=DEFAULT_LISTEN_ADDRESS,
    show_default=True,
    help="Listen address for metrics endpoint.",
)
@click.option(
    "--telemetry-path",
    envvar=_env("TELEMETRY_PATH"),
    default=DEFAULT_METRICS_PATH,
    show_default=True,
    help="Path to metric exposition endpoint.",
)
@click.option(
    "--log-level",
    envvar=_env("LOG_LEVEL"),
    type=click.Choice(list(LogLevel.__members__), case_sensitive=False),
    default=LogLevel.INFO.name,
    show_default=True,
)
# pylint: disable=too-many-arguments
def main(
    modem_address: str,
    modem_username: str,
    modem_password: str | None,
    modem_status_path: str,
    modem_timeout: float | None,
    telemetry_addr: str,
    telemetry_path: str,
    log_level: str,
):
    """Prometheus exporter for Netgear cable modem DOCSIS channel stats."""
    configure_logging(LogLevel[log_level.upper()])
    log.info("Starting up")

    try:
        config = ExporterConfig(
            modem_password=modem_password or "",
            modem_address=modem_address,
            modem_username=modem_username,
            modem_status_path=modem_status_path,
            modem_timeout=modem_timeout,
            listen_address=telemetry_addr,
            metrics_path=telemetry_path,
        )
    except ConfigError as e:
        log.error("Invalid configuration", error=str(e))
        raise click.UsageError(str(e)) from e

    run_exporter(config)


if __name__ == "__main__":
    # pylint: disable=no-value-for-parameter
    main()
