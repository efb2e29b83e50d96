"""Sensor rules, descriptors and series points.

Sensor rules are plain data: which canonical sensor a column belongs to is
decided by a pure matcher in ``core.classification.sensor_catalog``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class MatchKind(Enum):
    """How a rule pattern is compared against a field name."""

    SUBSTRING = "substring"  # anywhere in the name
    WORD = "word"            # word boundary on both sides
    TRAILING = "trailing"    # word boundary after the text only


@dataclass(frozen=True)
class SensorPattern:
    kind: MatchKind
    text: str


@dataclass(frozen=True)
class SensorRule:
    """Canonical sensor identity plus the patterns that recognise its column."""

    key: str
    label: str
    unit: str
    patterns: Tuple[SensorPattern, ...]


@dataclass(frozen=True)
class SensorDescriptor:
    """A sensor present in the active schema."""

    key: str
    label: str
    unit: str
    field: str

    @property
    def column_label(self) -> str:
        return f"{self.label} ({self.unit})" if self.unit else self.label

    def to_dict(self) -> dict:
        return {"key": self.key, "label": self.label, "unit": self.unit, "field": self.field}


@dataclass(frozen=True)
class SeriesPoint:
    """Un punto de la serie: epoch millis + valor (None si no numérico)."""

    timestamp: int
    value: Optional[float]

    def to_dict(self) -> dict:
        return {"timestamp": self.timestamp, "value": self.value}
