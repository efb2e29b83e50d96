"""Classification layer - columnas → sensores canónicos."""

from .sensor_catalog import (
    SENSOR_CATALOG,
    SUMMARY_PATTERNS,
    UNIT_CODES,
    find_field,
    find_latest,
    get_rule,
    matches,
    present_sensors,
    resolve_unit,
)

__all__ = [
    "SENSOR_CATALOG",
    "SUMMARY_PATTERNS",
    "UNIT_CODES",
    "find_field",
    "find_latest",
    "get_rule",
    "matches",
    "present_sensors",
    "resolve_unit",
]
