from __future__ import annotations

from collections import deque
from typing import Deque, Dict, Iterable, List, Optional

from ..domain.sensor import SeriesPoint

DEFAULT_MAX_POINTS = 600


class SeriesStore:
    """Historial acotado en memoria por sensor.

    - Un deque por sensor con los últimos ``max_points`` puntos en orden de
      llegada; al superar el límite se descarta el más antiguo (O(1)).
    - No reordena: la cronología es la de llegada.
    - No es thread-safe por sí mismo; el decoder serializa el acceso.
    """

    def __init__(self, max_points: int = DEFAULT_MAX_POINTS) -> None:
        if max_points < 1:
            raise ValueError("max_points must be >= 1")
        self._max_points = int(max_points)
        # sensor_key -> deque[SeriesPoint]
        self._buffers: Dict[str, Deque[SeriesPoint]] = {}

    @property
    def max_points(self) -> int:
        return self._max_points

    def append(self, key: str, timestamp: int, value: Optional[float]) -> None:
        buf = self._buffers.get(key)
        if buf is None:
            buf = self._buffers[key] = deque(maxlen=self._max_points)
        buf.append(SeriesPoint(timestamp=timestamp, value=value))

    def points(self, key: str) -> List[SeriesPoint]:
        """Copia de la serie de un sensor (vacía si no existe)."""
        return list(self._buffers.get(key, ()))

    def keys(self) -> List[str]:
        return list(self._buffers)

    def copy(self, keys: Optional[Iterable[str]] = None) -> Dict[str, List[SeriesPoint]]:
        selected = self._buffers.keys() if keys is None else keys
        return {key: self.points(key) for key in selected}

    def total_points(self) -> int:
        return sum(len(buf) for buf in self._buffers.values())

    def clear(self) -> None:
        self._buffers.clear()

    def __len__(self) -> int:
        return len(self._buffers)
