"""Schema - forma de una línea de datos del PAM.

Un Schema es la lista ordenada de nombres de campo que describe cada línea
CSV emitida por el dispositivo. Es inmutable: solo se reemplaza por una
acción explícita (auto-detección, default forzado o header del usuario).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Tuple

DEFAULT_DELIMITER = ","

# Fallback when the device streams numeric rows without printing a header
DEFAULT_SCHEMA_FIELDS: Tuple[str, ...] = (
    "DeviceId",
    "PM1(UGM3)",
    "PM2.5(UGM3)",
    "PM10(UGM3)",
    "TVOC(PPB)",
    "CO2(PPM)",
    "RELHUM(%)",
    "TEMP(C)",
    "PRESS(MBAR)",
    "LAT(LAT)",
    "LON(LON)",
    "Battery(%)",
    "Date",
    "Time",
)


class SchemaSource(Enum):
    """Origen del schema activo."""
    DETECTED = "detected"
    DEFAULT = "default"
    CUSTOM = "custom"


def tokenize(line: str, delimiter: str = DEFAULT_DELIMITER) -> List[str]:
    """Split a line on the delimiter, trimming whitespace around every token."""
    return [token.strip() for token in line.split(delimiter)]


@dataclass(frozen=True)
class Schema:
    """Lista ordenada de campos de una línea decodificada."""

    fields: Tuple[str, ...]
    source: SchemaSource = SchemaSource.DETECTED

    @classmethod
    def default(cls) -> Schema:
        return cls(fields=DEFAULT_SCHEMA_FIELDS, source=SchemaSource.DEFAULT)

    @classmethod
    def from_tokens(cls, tokens: Sequence[str], source: SchemaSource) -> Schema:
        return cls(fields=tuple(tokens), source=source)

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self):
        return iter(self.fields)

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def to_dict(self) -> dict:
        return {"fields": list(self.fields), "source": self.source.value}
