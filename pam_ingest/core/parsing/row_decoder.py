"""Row decoder - línea + schema → field map."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from ..domain.schema import DEFAULT_DELIMITER, Schema, tokenize

FieldMap = Dict[str, str]


@dataclass(frozen=True)
class DecodeResult:
    """Resultado de decodificar una fila."""

    valid: bool
    field_map: Optional[FieldMap] = None
    error: Optional[str] = None
    expected: int = 0
    got: int = 0


def decode_row(line: str, schema: Schema, delimiter: str = DEFAULT_DELIMITER) -> DecodeResult:
    """Zip the line's tokens with the schema fields.

    A token count different from the schema length is rejected as a whole;
    nothing is partially decoded.
    """
    tokens = tokenize(line, delimiter)
    expected = len(schema)
    if len(tokens) != expected:
        return DecodeResult(
            valid=False,
            error=f"Field count mismatch: expected {expected}, got {len(tokens)}",
            expected=expected,
            got=len(tokens),
        )

    return DecodeResult(
        valid=True,
        field_map=dict(zip(schema.fields, tokens)),
        expected=expected,
        got=len(tokens),
    )
