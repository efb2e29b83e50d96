"""TelemetryDecoder - dueño único del estado de la sesión.

FUENTE ÚNICA DE VERDAD para schema, snapshot, series y raw log.

- ``ingest(line)`` es el único punto de mutación por datos.
- Las acciones de schema (default / custom) reemplazan el schema y limpian
  snapshot + series en el mismo paso.
- Un solo lock serializa escritores; los lectores solo copian bajo el lock,
  así nunca observan una fila aplicada a medias ni claves de dos schemas.
"""

from __future__ import annotations

import logging
import threading
import time
from enum import Enum
from typing import Any, Dict, List, Optional

from ..classification.sensor_catalog import SUMMARY_PATTERNS, find_latest, present_sensors
from ..domain.schema import DEFAULT_DELIMITER, Schema, SchemaSource, tokenize
from ..domain.sensor import SensorDescriptor, SeriesPoint
from ..export.exporter import ExportResult, export_raw, export_series
from ..monitoring.stats import Stats
from ..parsing.coercion import CoercedValue, coerce_value, parse_number
from ..parsing.row_decoder import decode_row
from ..parsing.schema_detector import SchemaDetector
from ..state.raw_log import DEFAULT_MAX_LINES, RawLog
from ..state.series_store import DEFAULT_MAX_POINTS, SeriesStore
from ..timing.timestamp_resolver import Clock, resolve_timestamp

logger = logging.getLogger(__name__)

NOTE_DEFAULT_SCHEMA = "Assumed default header"
NOTE_CUSTOM_SCHEMA = "Custom header set"


class IngestOutcome(Enum):
    """Qué pasó con una línea."""
    IGNORED = "ignored"      # vacía
    DISCARDED = "discarded"  # sin schema todavía
    HEADER = "header"        # fijó el schema
    DECODED = "decoded"
    REJECTED = "rejected"    # aridad incorrecta


class TelemetryDecoder:
    def __init__(
        self,
        delimiter: str = DEFAULT_DELIMITER,
        max_points: int = DEFAULT_MAX_POINTS,
        raw_log_lines: int = DEFAULT_MAX_LINES,
        default_schema: Optional[Schema] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self._delimiter = delimiter
        self._clock = clock
        self._lock = threading.Lock()
        self._detector = SchemaDetector(delimiter=delimiter, default_schema=default_schema)
        self._series = SeriesStore(max_points=max_points)
        self._raw = RawLog(max_lines=raw_log_lines)
        self._snapshot: Dict[str, CoercedValue] = {}
        self._sensors: List[SensorDescriptor] = []
        self._stats = Stats()

    @classmethod
    def from_settings(cls, settings) -> TelemetryDecoder:
        return cls(
            delimiter=settings.delimiter,
            max_points=settings.series_max_points,
            raw_log_lines=settings.raw_log_max_lines,
        )

    # ------------------------------------------------------------------
    # Escritura
    # ------------------------------------------------------------------

    def ingest(self, line: str) -> IngestOutcome:
        """Process one framed line in arrival order."""
        trimmed = str(line).strip()
        if not trimmed:
            return IngestOutcome.IGNORED

        with self._lock:
            self._stats.lines_received += 1
            self._stats.last_line_at = time.time()
            self._raw.append(trimmed)

            detection = self._detector.observe(trimmed)
            if detection.schema_changed:
                self._reset_for(detection.schema)

            if not detection.decode:
                if detection.schema_changed:
                    return IngestOutcome.HEADER
                self._stats.lines_discarded += 1
                return IngestOutcome.DISCARDED

            return self._apply_row(trimmed, detection.schema)

    def assume_default_schema(self) -> Schema:
        with self._lock:
            schema = self._detector.default_schema
            self._replace_schema(schema, NOTE_DEFAULT_SCHEMA)
            return schema

    def set_custom_schema(self, text: str) -> Optional[Schema]:
        """Parse a user-supplied header; None (and no change) if it has no fields."""
        tokens = [t for t in tokenize(text or "", self._delimiter) if t]
        if not tokens:
            logger.warning("[DECODER] Custom header ignored: no fields in %r", text)
            return None

        schema = Schema.from_tokens(tokens, SchemaSource.CUSTOM)
        with self._lock:
            self._replace_schema(schema, NOTE_CUSTOM_SCHEMA)
        return schema

    def note(self, text: str) -> None:
        """Append a session note (commands sent, transport errors) to the raw log."""
        with self._lock:
            self._raw.append(text)

    def clear_raw_log(self) -> None:
        with self._lock:
            self._raw.clear()

    def _replace_schema(self, schema: Schema, note: str) -> None:
        self._detector.replace(schema)
        self._reset_for(schema)
        self._raw.append(note)

    def _reset_for(self, schema: Optional[Schema]) -> None:
        self._snapshot = {}
        self._series.clear()
        self._sensors = present_sensors(schema)
        self._stats.schema_changes += 1
        logger.info(
            "[DECODER] Schema set (%s): %d fields, sensors=%s",
            schema.source.value if schema else "none",
            len(schema) if schema else 0,
            [s.key for s in self._sensors],
        )

    def _apply_row(self, line: str, schema: Schema) -> IngestOutcome:
        result = decode_row(line, schema, self._delimiter)
        if not result.valid:
            self._stats.rows_rejected += 1
            logger.warning("[DECODER] Row rejected: %s line=%r", result.error, line)
            return IngestOutcome.REJECTED

        row = result.field_map
        timestamp = resolve_timestamp(row, self._clock)

        # Nuevo snapshot completo; se publica por reemplazo de referencia
        self._snapshot = {name: coerce_value(row.get(name)) for name in schema.fields}
        for sensor in self._sensors:
            self._series.append(sensor.key, timestamp, parse_number(row.get(sensor.field)))

        self._stats.rows_decoded += 1
        if self._stats.rows_decoded % 100 == 0:
            logger.info("[DECODER] %s", self._stats)
        return IngestOutcome.DECODED

    # ------------------------------------------------------------------
    # Lectura (copias puntuales)
    # ------------------------------------------------------------------

    def current_schema(self) -> Optional[Schema]:
        with self._lock:
            return self._detector.schema

    def snapshot(self) -> Dict[str, CoercedValue]:
        with self._lock:
            return dict(self._snapshot)

    def series(self, sensor_key: str) -> List[SeriesPoint]:
        with self._lock:
            return self._series.points(sensor_key)

    def present_sensors(self) -> List[SensorDescriptor]:
        with self._lock:
            return list(self._sensors)

    def raw_log(self) -> List[str]:
        with self._lock:
            return self._raw.lines()

    @property
    def raw_log_capacity(self) -> int:
        return self._raw.max_lines

    @property
    def series_capacity(self) -> int:
        return self._series.max_points

    @property
    def stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                **self._stats.to_dict(),
                "series_points": self._series.total_points(),
                "raw_log_lines": len(self._raw),
            }

    def summary(self) -> Dict[str, Any]:
        """Latest device fields plus one entry per present sensor."""
        with self._lock:
            schema = self._detector.schema
            snapshot = dict(self._snapshot)
            sensors = list(self._sensors)

        fields = {name: find_latest(schema, snapshot, pattern) for name, pattern in SUMMARY_PATTERNS.items()}
        return {
            **fields,
            "sensors": [
                {**s.to_dict(), "value": snapshot.get(s.field)}
                for s in sensors
            ],
        }

    def export_raw(self) -> ExportResult:
        return export_raw(self.raw_log())

    def export_series(self) -> ExportResult:
        with self._lock:
            sensors = list(self._sensors)
            series = self._series.copy(s.key for s in sensors)
        return export_series(sensors, series)
