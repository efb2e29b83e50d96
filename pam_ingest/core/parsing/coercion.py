"""Coerción de valores crudos del CSV."""

from __future__ import annotations

import math
import re
from typing import Optional, Union

NOT_AVAILABLE = "N/A"

_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_NON_FINITE = re.compile(r"[+-]?(?:nan|inf(?:inity)?)", re.IGNORECASE)

CoercedValue = Union[float, str, None]


def _is_missing(text: str) -> bool:
    return not text or text.upper() == NOT_AVAILABLE


def parse_number(raw: Optional[str]) -> Optional[float]:
    """Parse a decimal number; None for blanks, ``N/A``, text and non-finite values."""
    if raw is None:
        return None
    text = str(raw).strip()
    if _is_missing(text) or _DECIMAL.fullmatch(text) is None:
        return None
    value = float(text)
    return value if math.isfinite(value) else None


def coerce_value(raw: Optional[str]) -> CoercedValue:
    """Coerce a raw field for the snapshot.

    Blank / ``N/A`` / NaN / Infinity → None, decimal → float, anything else
    keeps the trimmed string (device id, date, time...).
    """
    if raw is None:
        return None
    text = str(raw).strip()
    if _is_missing(text) or _NON_FINITE.fullmatch(text):
        return None
    if _DECIMAL.fullmatch(text):
        return parse_number(text)
    return text
