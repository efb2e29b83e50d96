from __future__ import annotations

from collections import deque
from typing import Deque, List

DEFAULT_MAX_LINES = 2000


class RawLog:
    """Bounded log of every non-empty line received, plus session notes."""

    def __init__(self, max_lines: int = DEFAULT_MAX_LINES) -> None:
        if max_lines < 1:
            raise ValueError("max_lines must be >= 1")
        self._lines: Deque[str] = deque(maxlen=int(max_lines))

    @property
    def max_lines(self) -> int:
        return self._lines.maxlen or 0

    def append(self, line: str) -> None:
        self._lines.append(line)

    def lines(self) -> List[str]:
        return list(self._lines)

    def clear(self) -> None:
        self._lines.clear()

    def __len__(self) -> int:
        return len(self._lines)
