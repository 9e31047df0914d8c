"""Shared fixtures for the exporter tests."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from bs4 import BeautifulSoup

FIXTURES = Path(__file__).parent / "fixtures"


class FakeModemClient:
    """Stands in for ModemClient; returns canned HTML or raises, optionally after a delay."""

    status_path = "/DocsisStatus.asp"

    def __init__(self, html: str = "", error: Exception | None = None, delay: float = 0):
        self.html = html
        self.error = error
        self.delay = delay
        self.calls = 0
        self.events: list[str] = []

    async def fetch_status_page(self) -> bytes:
        self.calls += 1
        call = self.calls
        self.events.append(f"start-{call}")
        if self.delay:
            await asyncio.sleep(self.delay)
        self.events.append(f"end-{call}")
        if self.error is not None:
            raise self.error
        return self.html.encode("utf-8")


@pytest.fixture
def status_page_html() -> str:
    """DocsisStatus.asp as served by a CM600: 4 downstream + 2 upstream channels."""
    return (FIXTURES / "DocsisStatus.asp").read_text(encoding="utf-8")


@pytest.fixture
def status_soup(status_page_html) -> BeautifulSoup:
    return BeautifulSoup(status_page_html, "html.parser")


@pytest.fixture
def fake_client(status_page_html) -> FakeModemClient:
    return FakeModemClient(html=status_page_html)
