"""Timestamp resolver - reloj del dispositivo vs. reloj local.

Si la fila trae campos ``Date`` y ``Time`` (sin importar mayúsculas) se
combinan como ``DATE + "T" + TIME`` y se interpretan como fecha/hora local.
Si faltan, están vacíos o no se pueden parsear, se usa el instante de
llegada. Nunca lanza excepción.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Callable, Mapping, Optional

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


def now_ms() -> int:
    """Wall-clock instant in epoch milliseconds."""
    return int(time.time() * 1000)


def _lookup(field_map: Mapping[str, str], name: str) -> Optional[str]:
    wanted = name.lower()
    for key, value in field_map.items():
        if key.strip().lower() == wanted:
            return value
    return None


def parse_device_timestamp(date_str: Optional[str], time_str: Optional[str]) -> Optional[int]:
    """Epoch millis from the device date and time, or None if unusable."""
    date_str = (date_str or "").strip()
    time_str = (time_str or "").strip()
    if not date_str or not time_str:
        return None

    try:
        # Naive values are local time; an explicit offset is honoured.
        dt = datetime.fromisoformat(f"{date_str}T{time_str}")
        ms = int(round(dt.timestamp() * 1000))
        # Must round-trip to a local datetime
        datetime.fromtimestamp(ms / 1000, tz=timezone.utc).astimezone()
    except (ValueError, OverflowError, OSError) as e:
        logger.debug("[TIMESTAMP] Unusable device time %r %r: %s", date_str, time_str, e)
        return None
    return ms


def resolve_timestamp(field_map: Mapping[str, str], clock: Optional[Clock] = None) -> int:
    device_ms = parse_device_timestamp(_lookup(field_map, "Date"), _lookup(field_map, "Time"))
    if device_ms is not None:
        return device_ms
    return (clock or now_ms)()
