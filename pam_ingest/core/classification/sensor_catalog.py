"""Catálogo de sensores del PAM.

Reglas declarativas que clasifican nombres de columna en sensores
canónicos. El orden del catálogo es el orden de presentación.

Orden de resolución:
1. Una regla está presente si alguna columna del schema la satisface.
2. Si varias columnas la satisfacen, gana la primera en orden del schema.
3. La unidad sale del sufijo entre paréntesis de la columna (``TEMP(C)``);
   sin sufijo se usa la unidad por defecto de la regla.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Dict, Iterable, List, Mapping, Optional, Pattern, Tuple, Union

from ..domain.schema import Schema
from ..domain.sensor import MatchKind, SensorDescriptor, SensorPattern, SensorRule


def _p(kind: MatchKind, text: str) -> SensorPattern:
    return SensorPattern(kind=kind, text=text)


SENSOR_CATALOG: Tuple[SensorRule, ...] = (
    SensorRule("PM1", "PM1", "µg/m³", (_p(MatchKind.WORD, "PM1"),)),
    SensorRule("PM2_5", "PM2.5", "µg/m³", (_p(MatchKind.SUBSTRING, "PM2.5"),)),
    SensorRule("PM10", "PM10", "µg/m³", (_p(MatchKind.WORD, "PM10"),)),
    SensorRule("NO2", "NO₂", "ppb", (_p(MatchKind.WORD, "NO2"),)),
    SensorRule("CO", "CO", "ppb", (_p(MatchKind.WORD, "CO"),)),
    SensorRule("CO2", "CO₂", "ppm", (_p(MatchKind.WORD, "CO2"),)),
    SensorRule("TVOC", "TVOCs", "ppb", (_p(MatchKind.SUBSTRING, "TVOC"),)),
    SensorRule(
        "RH", "Relative Humidity", "%",
        (_p(MatchKind.SUBSTRING, "RELH"), _p(MatchKind.TRAILING, "RH")),
    ),
    SensorRule("TEMP", "Temperature", "°C", (_p(MatchKind.TRAILING, "TEMP"),)),
    SensorRule("PRESS", "Pressure", "hPa", (_p(MatchKind.TRAILING, "PRESS"),)),
    SensorRule(
        "CH4", "Methane", "ppm",
        (_p(MatchKind.SUBSTRING, "METHANE"), _p(MatchKind.SUBSTRING, "CH4")),
    ),
    SensorRule("BAT", "Battery", "%", (_p(MatchKind.SUBSTRING, "Battery"),)),
)

UNIT_CODES: Dict[str, str] = {
    "UGM3": "µg/m³",
    "HPA": "hPa",
    "C": "°C",
    "PPM": "ppm",
    "PPB": "ppb",
    "%": "%",
}

# Campos de resumen del dispositivo (no son sensores)
SUMMARY_PATTERNS: Dict[str, str] = {
    "device_id": r"DeviceId",
    "date": r"Date",
    "time": r"Time",
    "latitude": r"^LAT",
    "longitude": r"^LON",
}

_UNIT_SUFFIX = re.compile(r"\(([^()]*)\)\s*$")


@lru_cache(maxsize=None)
def _compile(pattern: SensorPattern) -> Pattern[str]:
    text = re.escape(pattern.text)
    if pattern.kind is MatchKind.WORD:
        text = rf"\b{text}\b"
    elif pattern.kind is MatchKind.TRAILING:
        text = rf"{text}\b"
    return re.compile(text, re.IGNORECASE)


def matches(rule: SensorRule, field_name: str) -> bool:
    """Pure matcher: does ``field_name`` belong to ``rule``?"""
    return any(_compile(p).search(field_name) for p in rule.patterns)


def find_field(rule: SensorRule, fields: Iterable[str]) -> Optional[str]:
    """First field, in schema order, matching the rule."""
    for name in fields:
        if matches(rule, name):
            return name
    return None


def get_rule(key: str) -> Optional[SensorRule]:
    for rule in SENSOR_CATALOG:
        if rule.key == key:
            return rule
    return None


def resolve_unit(field_name: str, default_unit: str) -> str:
    """Display unit for a column: suffix code if any, else the rule default.

    Unknown codes pass through verbatim (``PRESS(MBAR)`` → ``MBAR``).
    """
    match = _UNIT_SUFFIX.search(field_name)
    if not match:
        return default_unit
    code = match.group(1).strip()
    if not code:
        return default_unit
    return UNIT_CODES.get(code.upper(), code)


def present_sensors(schema: Optional[Schema]) -> List[SensorDescriptor]:
    if schema is None:
        return []

    result: List[SensorDescriptor] = []
    for rule in SENSOR_CATALOG:
        name = find_field(rule, schema.fields)
        if name is None:
            continue
        result.append(
            SensorDescriptor(
                key=rule.key,
                label=rule.label,
                unit=resolve_unit(name, rule.unit),
                field=name,
            )
        )
    return result


def find_latest(
    schema: Optional[Schema],
    snapshot: Mapping[str, object],
    pattern: Union[str, Pattern[str]],
) -> object:
    """Latest snapshot value of the first schema field matching ``pattern``."""
    if schema is None:
        return None
    regex = re.compile(pattern, re.IGNORECASE) if isinstance(pattern, str) else pattern
    for name in schema.fields:
        if regex.search(name):
            return snapshot.get(name)
    return None
