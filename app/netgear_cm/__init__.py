"""Scrape + export for the Netgear family of DOCSIS cable modems.

Everything is built around the single `DocsisStatus.asp` page the modem serves.
That page has been the same shape on every Netgear model I could find screenshots of (CM500, CM600, C3700, C7000 ...)
but the column order is pinned down in `layout.py` so a model that does things differently only needs a new layout.
"""
