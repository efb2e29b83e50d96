"""Parsing layer - detección de schema, decodificación y coerción."""

from .coercion import CoercedValue, coerce_value, parse_number
from .predicates import LineKind, classify_line, has_alpha, has_delimiter, is_numeric_charset
from .row_decoder import DecodeResult, FieldMap, decode_row
from .schema_detector import Detection, DetectorState, SchemaDetector

__all__ = [
    "CoercedValue",
    "coerce_value",
    "parse_number",
    "LineKind",
    "classify_line",
    "has_alpha",
    "has_delimiter",
    "is_numeric_charset",
    "DecodeResult",
    "FieldMap",
    "decode_row",
    "Detection",
    "DetectorState",
    "SchemaDetector",
]
