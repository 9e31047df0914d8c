"""Position -> field mapping for the channel tables.

The modem's tables have a header row but matching on header text is more trouble than it's worth
(the wording changes between firmware versions; 'SNR' vs 'SNR / MER' ...) so we go by column position instead.
That makes the column order the one thing most likely to break on a new model, hence it all lives here
and a different model only needs a different `TableLayout`.
"""

from dataclasses import dataclass
from typing import Any, Callable

from netgear_cm.fields import format_frequency_mhz, ksym_to_sym, parse_field
from netgear_cm.models import DownstreamChannelReading, UpstreamChannelReading


@dataclass(frozen=True)
class Column:
    """One column of a channel table.

    unit=None means the cell is used as-is (label). Otherwise the cell is run through parse_field() with
    that unit and then through `convert`, if set.
    """

    field: str
    unit: str | None = None
    convert: Callable[[float], Any] | None = None

    def extract(self, text: str) -> Any:
        if self.unit is None:
            return text
        value = parse_field(text, self.unit)
        if self.convert is not None:
            return self.convert(value)
        return value


@dataclass(frozen=True)
class TableLayout:
    """Where a table lives on the page, what its columns are, and what each row turns into"""

    name: str
    selector: str
    columns: tuple[Column, ...]
    record_type: type


# Channel | Lock Status | Modulation | Channel ID | Frequency | Power | SNR | Correctables | Uncorrectables
#   e.g.: ['1', 'Locked', 'QAM256', '5', '602000000 Hz', '0.6 dBmV', '38.5 dB', '15', '0']
DOWNSTREAM_LAYOUT = TableLayout(
    name="downstream",
    selector="#dsTable tbody",
    columns=(
        Column("channel"),
        Column("lock_status"),
        Column("modulation"),
        Column("channel_id"),
        Column("frequency_mhz", unit="Hz", convert=format_frequency_mhz),
        Column("power_dbmv", unit="dBmV"),
        Column("snr_db", unit="dB"),
        Column("correctable_errors", unit=""),
        Column("uncorrectable_errors", unit=""),
    ),
    record_type=DownstreamChannelReading,
)

# Channel | Lock Status | US Channel Type | Channel ID | Symbol Rate | Frequency | Power
#   e.g.: ['1', 'Locked', 'ATDMA', '1', '5120 Ksym/sec', '39008000 Hz', '41.0 dBmV']
UPSTREAM_LAYOUT = TableLayout(
    name="upstream",
    selector="#usTable tbody",
    columns=(
        Column("channel"),
        Column("lock_status"),
        Column("channel_type"),
        Column("channel_id"),
        Column("symbol_rate_per_sec", unit="Ksym/sec", convert=ksym_to_sym),
        Column("frequency_mhz", unit="Hz", convert=format_frequency_mhz),
        Column("power_dbmv", unit="dBmV"),
    ),
    record_type=UpstreamChannelReading,
)
