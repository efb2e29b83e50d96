"""CSV export of the raw log and the sensor series.

Both tables use comma delimiter, CRLF rows, double-quote escaping and are
prefixed with a UTF-8 byte-order mark so spreadsheet tools pick the right
encoding. Exports with nothing to write are declined, not emitted empty.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Mapping, Optional, Sequence

import pandas as pd

from ..domain.sensor import SensorDescriptor, SeriesPoint

logger = logging.getLogger(__name__)

BOM = "\ufeff"
ROW_TERMINATOR = "\r\n"
RAW_COLUMN = "line"
TIME_COLUMN = "Timestamp"


@dataclass(frozen=True)
class ExportResult:
    """Outcome of an export: the CSV text, or the reason it was declined."""

    content: Optional[str]
    filename: Optional[str] = None
    message: Optional[str] = None
    rows: int = 0

    @property
    def declined(self) -> bool:
        return self.content is None

    @classmethod
    def decline(cls, message: str) -> ExportResult:
        logger.info("[EXPORT] Declined: %s", message)
        return cls(content=None, message=message)


def format_timestamp(ms: int) -> str:
    """Local ISO-8601 with milliseconds and numeric offset."""
    dt = datetime.fromtimestamp(ms / 1000, tz=timezone.utc).astimezone()
    return dt.isoformat(timespec="milliseconds")


def format_value(value: Optional[float]) -> Optional[str]:
    if value is None:
        return None
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _file_stamp() -> str:
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def _to_csv(frame: pd.DataFrame, **kwargs) -> str:
    return BOM + frame.to_csv(lineterminator=ROW_TERMINATOR, na_rep="", **kwargs)


def export_raw(lines: Sequence[str]) -> ExportResult:
    if not lines:
        return ExportResult.decline("Raw log is empty, nothing to export")

    frame = pd.DataFrame({RAW_COLUMN: list(lines)}, dtype=object)
    return ExportResult(
        content=_to_csv(frame, index=False),
        filename=f"pam_raw_{_file_stamp()}.csv",
        rows=len(frame),
    )


def _sensor_column(points: Sequence[SeriesPoint]) -> pd.Series:
    index = pd.Index([p.timestamp for p in points], dtype="int64")
    column = pd.Series([format_value(p.value) for p in points], index=index, dtype=object)
    # Same timestamp twice for one sensor: last arrival wins
    return column[~column.index.duplicated(keep="last")]


def export_series(
    sensors: Sequence[SensorDescriptor],
    series: Mapping[str, Sequence[SeriesPoint]],
) -> ExportResult:
    """Wide table: one row per distinct timestamp, one column per sensor."""
    if not sensors:
        return ExportResult.decline("No sensors detected, nothing to export")
    if not any(series.get(s.key) for s in sensors):
        return ExportResult.decline("No sensor data yet, nothing to export")

    columns = {s.column_label: _sensor_column(series.get(s.key, ())) for s in sensors}
    frame = pd.DataFrame(columns).sort_index()
    frame = frame[[s.column_label for s in sensors]]
    frame.index = [format_timestamp(int(ms)) for ms in frame.index]

    logger.info("[EXPORT] Series export: %d rows, %d sensors", len(frame), len(sensors))
    return ExportResult(
        content=_to_csv(frame, index=True, index_label=TIME_COLUMN),
        filename=f"pam_series_{_file_stamp()}.csv",
        rows=len(frame),
    )
