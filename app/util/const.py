import logging
from enum import Enum

# Every env-var the exporter looks at starts with this
ENV_PREFIX = "NETGEAR_CM_EXPORTER"

DEFAULT_MODEM_ADDRESS = "192.168.100.1"
# Netgear docs don't indicate that the username _can_ be changed
DEFAULT_MODEM_USERNAME = "admin"
# Older firmware serves .asp, some newer revisions serve the same page as .htm
DEFAULT_STATUS_PATH = "/DocsisStatus.asp"

DEFAULT_LISTEN_ADDRESS = ":9527"
DEFAULT_METRICS_PATH = "/metrics"

# Unlikely that the modem cares but it's easy enough to pretend to be a browser just in case
REQUEST_HEADERS = {
    "User-Agent": "Mozilla/5.0 (X11; Linux x86_64; rv:123.4) Gecko/20100101 Firefox/123.4",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Connection": "keep-alive",
    "Pragma": "no-cache",
    "Cache-Control": "no-cache",
}


class LogLevel(Enum):
    """Simple enum of supported log levels for easy validation"""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL
