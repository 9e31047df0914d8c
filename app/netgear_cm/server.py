"""
The HTTP side of things.

prometheus_client's start_http_server() doesn't support setting the path, only the port, and it runs
collect() on its own threads. Both are reasons to serve /metrics from aiohttp instead; the modem fetch is
already async and the lock in StatusExporter works on the one event loop.
"""

import structlog
from aiohttp import ClientSession, ClientTimeout, web
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, CollectorRegistry

from netgear_cm.config import ExporterConfig
from netgear_cm.scrape import ModemClient, StatusExporter
from util.const import REQUEST_HEADERS

log = structlog.get_logger(__name__)

CONFIG_KEY = web.AppKey("config", ExporterConfig)
REGISTRY_KEY = web.AppKey("registry", CollectorRegistry)
EXPORTER_KEY = web.AppKey("exporter", StatusExporter)


async def modem_client_ctx(app: web.Application):
    """Owns the modem session + exporter for the lifetime of the app."""
    config = app[CONFIG_KEY]
    registry = app[REGISTRY_KEY]

    session_kwargs = {}
    if config.modem_timeout is not None:
        session_kwargs["timeout"] = ClientTimeout(total=config.modem_timeout)
    session = ClientSession(
        base_url=config.modem_base_url,
        headers=REQUEST_HEADERS,
        **session_kwargs,
    )

    client = ModemClient(
        session,
        username=config.modem_username,
        password=config.modem_password,
        status_path=config.modem_status_path,
    )
    exporter = StatusExporter(client)
    registry.register(exporter)
    app[EXPORTER_KEY] = exporter
    log.info(
        "Exporter ready",
        modem=config.modem_base_url,
        status_path=config.modem_status_path,
    )

    yield

    registry.unregister(exporter)
    await session.close()


async def metrics_handler(request: web.Request) -> web.Response:
    exporter = request.app[EXPORTER_KEY]
    body = await exporter.render(request.app[REGISTRY_KEY])
    return web.Response(body=body, headers={"Content-Type": CONTENT_TYPE_LATEST})


async def redirect_handler(request: web.Request) -> web.Response:
    # Anything that isn't the metrics path gets bounced to it
    raise web.HTTPMovedPermanently(request.app[CONFIG_KEY].metrics_path)


def build_app(
    config: ExporterConfig, registry: CollectorRegistry = REGISTRY
) -> web.Application:
    app = web.Application()
    app[CONFIG_KEY] = config
    app[REGISTRY_KEY] = registry
    app.cleanup_ctx.append(modem_client_ctx)

    app.router.add_get(config.metrics_path, metrics_handler)
    # Routes match in order they were added; this has to come after the metrics route
    app.router.add_get("/{tail:.*}", redirect_handler)
    return app
