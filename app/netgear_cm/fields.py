"""
Turning a single table cell into a number.

Every numeric cell on the status page is a number followed by a unit: '602000000 Hz', '38.5 dB', '5120 Ksym/sec'...
The error counter columns are the exception; those are bare numbers.
"""

import re

# Sign, digits, optional fraction, optional exponent. Same sort of thing strconv would accept.
_FLOAT_PATTERN = r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?"

# Compiled pattern per unit; there's only a handful of units on the page
_PATTERNS: dict[str, re.Pattern] = {}


def _pattern_for(unit: str) -> re.Pattern:
    if (pattern := _PATTERNS.get(unit)) is None:
        if unit:
            pattern = re.compile(rf"({_FLOAT_PATTERN})\s*{re.escape(unit)}")
        else:
            pattern = re.compile(rf"({_FLOAT_PATTERN})")
        _PATTERNS[unit] = pattern
    return pattern


def parse_field(text: str, unit: str = "") -> float:
    """Pull the leading float out of `text` when it looks like '<float> <unit>'.

    Anything that doesn't look like that (empty cell, wrong unit, '---' ...) comes back as 0.0.
    This is deliberately forgiving; one odd cell should not cost us the rest of the row.
    """
    match = _pattern_for(unit).fullmatch(text.strip())
    if match is None:
        return 0.0
    return float(match.group(1))


def format_frequency_mhz(hz: float) -> str:
    """602000000 -> '602.00 MHz'. Used as a label, not a value, so it stays a string."""
    return f"{hz / 1e6:.2f} MHz"


def ksym_to_sym(ksym_per_sec: float) -> float:
    """Upstream table reports symbol rate in Ksym/sec; publish in sym/sec."""
    return ksym_per_sec * 1000
