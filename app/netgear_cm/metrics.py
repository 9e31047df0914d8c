"""All the boiler plate for defining metrics.

Unlike a long-running poller, this exporter scrapes the modem when Prometheus scrapes us.
So instead of module level Gauge()/Counter() objects that hold on to every label combination ever seen,
fresh *MetricFamily objects are built from each scrape's readings. A channel that disappears from the modem
disappears from /metrics on the next scrape rather than hanging around with a stale value.
"""

from typing import Iterable

from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily

from netgear_cm.models import (
    DownstreamChannelReading,
    ScrapeOutcome,
    UpstreamChannelReading,
)

METRICS_NS = "netgear_cm"

# Every label comes straight off the page. Frequency is a label rather than a metric of its own; it's
#   fixed per channel and makes the dashboards a lot easier to read.
DS_LABELS = ["channel", "lock_status", "modulation", "channel_id", "frequency"]
US_LABELS = ["channel", "lock_status", "channel_type", "channel_id", "frequency"]


def _ds_label_values(reading: DownstreamChannelReading) -> list[str]:
    return [
        reading.channel,
        reading.lock_status,
        reading.modulation,
        reading.channel_id,
        reading.frequency_mhz,
    ]


def _us_label_values(reading: UpstreamChannelReading) -> list[str]:
    return [
        reading.channel,
        reading.lock_status,
        reading.channel_type,
        reading.channel_id,
        reading.frequency_mhz,
    ]


def build_scrape_families(outcome: ScrapeOutcome) -> list[CounterMetricFamily]:
    """Meta metrics: how often have we tried, how often did it go wrong"""
    # CounterMetricFamily appends the _total on exposition
    scrapes = CounterMetricFamily(
        f"{METRICS_NS}_status_scrapes",
        "Total number of scrapes of the modem status page.",
        value=outcome.attempted,
    )
    errors = CounterMetricFamily(
        f"{METRICS_NS}_status_scrape_errors",
        "Total number of failed scrapes of the modem status page.",
        value=outcome.failed,
    )
    return [scrapes, errors]


def build_downstream_families(
    readings: Iterable[DownstreamChannelReading],
) -> list[GaugeMetricFamily | CounterMetricFamily]:
    snr = GaugeMetricFamily(
        f"{METRICS_NS}_downstream_channel_snr_db",
        "Downstream channel signal to noise ratio in dB.",
        labels=DS_LABELS,
    )
    power = GaugeMetricFamily(
        f"{METRICS_NS}_downstream_channel_power_dbmv",
        "Downstream channel power in dBmV.",
        labels=DS_LABELS,
    )
    # The modem keeps these running since it last booted so they really are counters
    correctable = CounterMetricFamily(
        f"{METRICS_NS}_downstream_channel_correctable_errors",
        "Downstream channel correctable errors.",
        labels=DS_LABELS,
    )
    uncorrectable = CounterMetricFamily(
        f"{METRICS_NS}_downstream_channel_uncorrectable_errors",
        "Downstream channel uncorrectable errors.",
        labels=DS_LABELS,
    )

    for reading in readings:
        labels = _ds_label_values(reading)
        snr.add_metric(labels, reading.snr_db)
        power.add_metric(labels, reading.power_dbmv)
        correctable.add_metric(labels, reading.correctable_errors)
        uncorrectable.add_metric(labels, reading.uncorrectable_errors)

    return [snr, power, correctable, uncorrectable]


def build_upstream_families(
    readings: Iterable[UpstreamChannelReading],
) -> list[GaugeMetricFamily]:
    power = GaugeMetricFamily(
        f"{METRICS_NS}_upstream_channel_power_dbmv",
        "Upstream channel power in dBmV.",
        labels=US_LABELS,
    )
    symbol_rate = GaugeMetricFamily(
        f"{METRICS_NS}_upstream_channel_symbol_rate",
        "Upstream channel symbol rate per second.",
        labels=US_LABELS,
    )

    for reading in readings:
        labels = _us_label_values(reading)
        power.add_metric(labels, reading.power_dbmv)
        symbol_rate.add_metric(labels, reading.symbol_rate_per_sec)

    return [power, symbol_rate]
