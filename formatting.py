from __future__ import annotations

import math

BYTE_UNITS = ["B", "kB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB"]


def _trim_number(value: float) -> str:
    text = f"{value:f}".rstrip("0").rstrip(".")
    return text or "0"


def pretty_bytes(size) -> str:
    """Format a byte count with decimal units, e.g. 1500 -> '1.5 kB'."""
    if size < 0:
        return "-" + pretty_bytes(-size)
    if size < 1:
        return f"{_trim_number(size)} B"
    exponent = min(int(math.floor(math.log10(size) / 3)), len(BYTE_UNITS) - 1)
    value = float(f"{size / 1000 ** exponent:.3g}")
    return f"{_trim_number(value)} {BYTE_UNITS[exponent]}"
