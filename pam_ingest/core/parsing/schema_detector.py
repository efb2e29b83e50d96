"""Schema detector - máquina de estados UNSET → SET.

Mientras no hay schema, cada línea no vacía se clasifica:

1. HEADER  → sus tokens pasan a ser el schema (la línea no es dato).
2. NUMERIC → si tiene tantos tokens como el schema default, se adopta el
             default y la MISMA línea se decodifica como dato; si no, se
             descarta y se sigue esperando.
3. OTHER   → se descarta.

Las acciones explícitas (default forzado, header custom) reemplazan el
schema en cualquier estado vía ``replace``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

from ..domain.schema import DEFAULT_DELIMITER, Schema, SchemaSource, tokenize
from .predicates import LineKind, classify_line

logger = logging.getLogger(__name__)


class DetectorState(Enum):
    UNSET = "unset"
    SET = "set"


@dataclass(frozen=True)
class Detection:
    """Resultado de observar una línea.

    ``decode`` indica si la línea debe pasar al row decoder;
    ``schema_changed`` si esta línea fijó un schema nuevo.
    """

    schema: Optional[Schema]
    decode: bool
    schema_changed: bool = False
    kind: Optional[LineKind] = None


class SchemaDetector:
    def __init__(
        self,
        delimiter: str = DEFAULT_DELIMITER,
        default_schema: Optional[Schema] = None,
    ) -> None:
        self._delimiter = delimiter
        self._default = default_schema or Schema.default()
        self._schema: Optional[Schema] = None
        self._transitions: Dict[LineKind, Callable[[str], Detection]] = {
            LineKind.HEADER: self._on_header,
            LineKind.NUMERIC: self._on_numeric,
            LineKind.OTHER: self._on_other,
        }

    @property
    def state(self) -> DetectorState:
        return DetectorState.UNSET if self._schema is None else DetectorState.SET

    @property
    def schema(self) -> Optional[Schema]:
        return self._schema

    @property
    def default_schema(self) -> Schema:
        return self._default

    def observe(self, line: str) -> Detection:
        """Feed one trimmed, non-empty line."""
        if self._schema is not None:
            return Detection(schema=self._schema, decode=True)

        kind = classify_line(line, self._delimiter)
        return self._transitions[kind](line)

    def replace(self, schema: Schema) -> None:
        self._schema = schema

    def _on_header(self, line: str) -> Detection:
        self._schema = Schema.from_tokens(tokenize(line, self._delimiter), SchemaSource.DETECTED)
        logger.info("[SCHEMA] Header detected: %d fields", len(self._schema))
        return Detection(schema=self._schema, decode=False, schema_changed=True, kind=LineKind.HEADER)

    def _on_numeric(self, line: str) -> Detection:
        count = len(tokenize(line, self._delimiter))
        if count != len(self._default):
            logger.debug(
                "[SCHEMA] Numeric row ignored while waiting for header: got=%d default=%d",
                count, len(self._default),
            )
            return Detection(schema=None, decode=False, kind=LineKind.NUMERIC)

        self._schema = self._default
        logger.info("[SCHEMA] Headerless numeric row, assuming default schema")
        return Detection(schema=self._schema, decode=True, schema_changed=True, kind=LineKind.NUMERIC)

    def _on_other(self, line: str) -> Detection:
        return Detection(schema=None, decode=False, kind=LineKind.OTHER)
