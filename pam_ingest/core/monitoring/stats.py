"""Estadísticas de procesamiento de líneas."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Stats:
    """Contadores del decoder."""

    lines_received: int = 0
    rows_decoded: int = 0
    rows_rejected: int = 0
    lines_discarded: int = 0
    schema_changes: int = 0
    last_line_at: float = 0
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __str__(self) -> str:
        return (
            f"Stats: received={self.lines_received} decoded={self.rows_decoded} "
            f"rejected={self.rows_rejected} discarded={self.lines_discarded}"
        )

    def to_dict(self) -> dict:
        """Convierte a diccionario."""
        return {
            "lines_received": self.lines_received,
            "rows_decoded": self.rows_decoded,
            "rows_rejected": self.rows_rejected,
            "lines_discarded": self.lines_discarded,
            "schema_changes": self.schema_changes,
            "last_line_at": self.last_line_at,
            "started_at": self.started_at.isoformat(),
            "decode_rate": self._decode_rate(),
        }

    def _decode_rate(self) -> float:
        """Calcula tasa de filas decodificadas vs. rechazadas."""
        total = self.rows_decoded + self.rows_rejected
        if total == 0:
            return 1.0
        return self.rows_decoded / total
