"""
Implementation of the fetch + scrape cycle and the custom collector that publishes the results.
"""

import asyncio

import structlog
from aiohttp import BasicAuth, ClientError, ClientSession
from bs4 import BeautifulSoup
from err.exceptions import ModemNotOkError
from prometheus_client import CollectorRegistry, generate_latest

from netgear_cm import metrics, parse
from netgear_cm.layout import DOWNSTREAM_LAYOUT, UPSTREAM_LAYOUT, TableLayout
from netgear_cm.models import ScrapeOutcome
from util.const import DEFAULT_STATUS_PATH

log = structlog.get_logger(__name__)


def build_auth_header(username: str, password: str) -> str:
    """'Basic base64(username:password)'. Built once, sent with every request."""
    return BasicAuth(username, password).encode()


class ModemClient:
    """Thin wrapper around the aiohttp session pointed at the modem.

    The session should already have base_url set to the modem; timeouts, headers etc. are
    whatever the session was created with.
    """

    def __init__(
        self,
        session: ClientSession,
        username: str,
        password: str,
        status_path: str = DEFAULT_STATUS_PATH,
    ):
        self._session = session
        self._status_path = status_path
        self._auth_header = build_auth_header(username, password)

    @property
    def status_path(self) -> str:
        return self._status_path

    async def fetch_status_page(self) -> bytes:
        """GET the DOCSIS status page and hand back the raw, undecoded HTML.

        Bytes, not str: BeautifulSoup sniffs the encoding itself, resp.text() raises on a stray
        non-utf-8 byte in the page.

        Raises:
            ModemNotOkError: modem answered with anything but 200
            aiohttp.ClientError: connection refused, reset ... etc
            asyncio.TimeoutError: modem didn't answer within the session's timeout
        """
        async with self._session.get(
            self._status_path, headers={"Authorization": self._auth_header}
        ) as resp:
            if resp.status != 200:
                if resp.status == 401:
                    _e = f"Modem indicated authentication details are incorrect. Status={resp.status}."
                else:
                    _e = f"Failed to get DOCSIS status page. Status={resp.status}."
                raise ModemNotOkError(_e, status_code=resp.status)
            return await resp.read()


class StatusExporter:
    """Custom collector; one scrape of the modem per scrape of the exporter.

    The flow for each pull from Prometheus is render() -> scrape() -> generate_latest() -> collect().
    All of that happens while holding one lock so two overlapping pulls can't interleave;
    the second simply waits for the first to finish.
    """

    def __init__(
        self,
        client: ModemClient,
        downstream_layout: TableLayout = DOWNSTREAM_LAYOUT,
        upstream_layout: TableLayout = UPSTREAM_LAYOUT,
    ):
        self._client = client
        self._downstream_layout = downstream_layout
        self._upstream_layout = upstream_layout
        self._lock = asyncio.Lock()
        self._outcome = ScrapeOutcome()
        # Parsed page from the most recent scrape; None if that scrape failed
        self._document: BeautifulSoup | None = None

    @property
    def outcome(self) -> ScrapeOutcome:
        """Snapshot of the scrape counters"""
        return ScrapeOutcome(self._outcome.attempted, self._outcome.failed)

    async def scrape(self) -> bool:
        """Fetch + parse the status page. Returns True if there's a document to publish from.

        No retry on failure; Prometheus will be back in a scrape interval or so and that's our retry.
        """
        self._outcome.record_attempt()
        self._document = None
        try:
            raw_html = await self._client.fetch_status_page()
        except ModemNotOkError as e:
            log.error("Caught ModemNotOkError", error=e, status=e.status_code)
            self._outcome.record_failure()
            return False
        except (ClientError, asyncio.TimeoutError) as e:
            log.error(
                "Failed to fetch modem status page",
                path=self._client.status_path,
                error=repr(e),
            )
            self._outcome.record_failure()
            return False

        log.debug("Fetched modem status page", size=len(raw_html))
        self._document = BeautifulSoup(raw_html, "html.parser")
        return True

    async def render(self, registry: CollectorRegistry) -> bytes:
        """Scrape the modem and return the exposition text for everything in `registry`"""
        async with self._lock:
            await self.scrape()
            return generate_latest(registry)

    def describe(self):
        # Empty families; keeps registry.register() from calling collect() and scraping
        #   data we don't have yet.
        return [
            *metrics.build_scrape_families(self._outcome),
            *metrics.build_downstream_families([]),
            *metrics.build_upstream_families([]),
        ]

    def collect(self):
        if self._document is not None:
            log.debug("Updating downstream channel metrics...")
            yield from metrics.build_downstream_families(
                parse.extract_downstream_channels(
                    self._document, self._downstream_layout
                )
            )
            log.debug("Updating upstream channel metrics...")
            yield from metrics.build_upstream_families(
                parse.extract_upstream_channels(self._document, self._upstream_layout)
            )
        yield from metrics.build_scrape_families(self._outcome)
