"""
Pulls channel rows out of the Netgear DOCSIS status page and turns them into readings.
    Only tested against the `DocsisStatus.asp` layout; see layout.py for what's assumed about column order.

"""

from typing import Any, Iterator

import structlog
from bs4 import BeautifulSoup

from netgear_cm.layout import DOWNSTREAM_LAYOUT, UPSTREAM_LAYOUT, TableLayout
from netgear_cm.models import DownstreamChannelReading, UpstreamChannelReading

log = structlog.get_logger(__name__)

# The status page ships with a table like:
#
#   <table id="dsTable">
#     <tbody>
#       <tr><td><b>Channel</b></td><td><b>Lock Status</b></td> ... </tr>
#       <tr><td>1</td><td>Locked</td><td>QAM256</td> ... </tr>
#       ...
#
# The first row is always the heading row and is skipped; everything after it is one channel.
# Some firmware leaves out the <tbody> and html.parser - unlike a browser - does not invent one for us.
# If the `tbody` selector comes back empty we fall back to the table element itself.


def _select_tables(soup: BeautifulSoup, selector: str) -> list[Any]:
    elements = soup.select(selector)
    if not elements and selector.endswith(" tbody"):
        table_selector = selector[: -len(" tbody")]
        log.debug("No tbody found, falling back to table", selector=table_selector)
        elements = soup.select(table_selector)
    return elements


def iter_table_rows(soup: BeautifulSoup, selector: str) -> Iterator[list[str]]:
    """Yields the stripped cell text of every non-header row under `selector`, in document order."""
    for table in _select_tables(soup, selector):
        for idx, row in enumerate(table.find_all("tr")):
            if idx == 0:
                # heading row
                continue
            yield [col.get_text().strip() for col in row.find_all("td")]


def extract_row(cells: list[str], layout: TableLayout) -> Any:
    """Map one row of cell text onto `layout.record_type` by column position.

    A short row is padded with empty cells rather than dropped; the missing fields end up as '' / 0.0.
    Extra trailing cells are ignored.
    """
    if len(cells) != len(layout.columns):
        log.debug(
            "Unexpected number of columns for row",
            table=layout.name,
            expected=len(layout.columns),
            data=cells,
        )
    values = {}
    for col_idx, column in enumerate(layout.columns):
        text = cells[col_idx].strip() if col_idx < len(cells) else ""
        values[column.field] = column.extract(text)
    return layout.record_type(**values)


def iter_channel_readings(soup: BeautifulSoup, layout: TableLayout) -> Iterator[Any]:
    """Lazily turns each data row of the layout's table into a reading."""
    for cells in iter_table_rows(soup, layout.selector):
        yield extract_row(cells, layout)


def extract_downstream_channels(
    soup: BeautifulSoup, layout: TableLayout = DOWNSTREAM_LAYOUT
) -> Iterator[DownstreamChannelReading]:
    """Wrapper"""
    return iter_channel_readings(soup, layout)


def extract_upstream_channels(
    soup: BeautifulSoup, layout: TableLayout = UPSTREAM_LAYOUT
) -> Iterator[UpstreamChannelReading]:
    """Wrapper"""
    return iter_channel_readings(soup, layout)
