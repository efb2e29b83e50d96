"""Predicados de clasificación de líneas.

Cada predicado es una función pura e independiente; ``classify_line``
los combina en el tipo de línea que consume la máquina de estados del
schema detector.
"""

from __future__ import annotations

import re
from enum import Enum
from functools import lru_cache
from typing import Pattern

from ..domain.schema import DEFAULT_DELIMITER

_ALPHA = re.compile(r"[A-Za-z]")


@lru_cache(maxsize=None)
def _numeric_charset(delimiter: str) -> Pattern[str]:
    return re.compile(rf"[0-9 .:\-{re.escape(delimiter)}]+")


class LineKind(Enum):
    """Tipo de línea mientras el schema no está definido."""
    HEADER = "header"    # delimitada y con letras
    NUMERIC = "numeric"  # delimitada y solo dígitos/separadores
    OTHER = "other"      # banner, menú, prompt...


def has_delimiter(line: str, delimiter: str = DEFAULT_DELIMITER) -> bool:
    return delimiter in line


def has_alpha(line: str) -> bool:
    return _ALPHA.search(line) is not None


def is_numeric_charset(line: str, delimiter: str = DEFAULT_DELIMITER) -> bool:
    """True when the line holds only digits, spaces, ``. : -`` and the delimiter."""
    return _numeric_charset(delimiter).fullmatch(line) is not None


def classify_line(line: str, delimiter: str = DEFAULT_DELIMITER) -> LineKind:
    if not has_delimiter(line, delimiter):
        return LineKind.OTHER
    if has_alpha(line):
        return LineKind.HEADER
    if is_numeric_charset(line, delimiter):
        return LineKind.NUMERIC
    return LineKind.OTHER
