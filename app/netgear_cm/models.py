"""Typed records for what gets pulled out of the status page.

Readings are created once per table row and handed straight to the metrics code; nothing holds on to them
between scrapes.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class DownstreamChannelReading:
    """One row of the `dsTable`"""

    channel: str
    lock_status: str
    modulation: str
    channel_id: str
    frequency_mhz: str
    power_dbmv: float
    snr_db: float
    correctable_errors: float
    uncorrectable_errors: float


@dataclass(frozen=True)
class UpstreamChannelReading:
    """One row of the `usTable`"""

    channel: str
    lock_status: str
    channel_type: str
    channel_id: str
    symbol_rate_per_sec: float
    frequency_mhz: str
    power_dbmv: float


@dataclass
class ScrapeOutcome:
    """Running tally of scrape attempts vs. failures for the life of the exporter.

    Both only ever go up; they're exposed as counters.
    """

    attempted: int = 0
    failed: int = 0

    def record_attempt(self) -> None:
        self.attempted += 1

    def record_failure(self) -> None:
        self.failed += 1
