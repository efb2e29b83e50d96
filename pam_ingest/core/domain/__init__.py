"""Domain layer - Modelos del stream PAM."""

from .schema import DEFAULT_DELIMITER, DEFAULT_SCHEMA_FIELDS, Schema, SchemaSource, tokenize
from .sensor import MatchKind, SensorDescriptor, SensorPattern, SensorRule, SeriesPoint

__all__ = [
    "DEFAULT_DELIMITER",
    "DEFAULT_SCHEMA_FIELDS",
    "Schema",
    "SchemaSource",
    "tokenize",
    "MatchKind",
    "SensorDescriptor",
    "SensorPattern",
    "SensorRule",
    "SeriesPoint",
]
