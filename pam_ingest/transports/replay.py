"""Replay transport - reproduce una captura (archivo o chunks en memoria).

Útil para pruebas y para re-procesar logs guardados del dispositivo.
Lo escrito hacia el "dispositivo" se guarda en ``sent``.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .base import TelemetryTransport, TransportError

logger = logging.getLogger(__name__)


class ReplayTransport(TelemetryTransport):
    def __init__(self, chunks: Iterable[bytes], delay_seconds: float = 0.0):
        self._chunks: List[bytes] = [c for c in chunks if c]
        self._delay = delay_seconds
        self._position = 0
        self._open = False
        self.sent: List[bytes] = []

    @classmethod
    def from_file(
        cls,
        path: str,
        chunk_size: int = 4096,
        delay_seconds: float = 0.0,
    ) -> ReplayTransport:
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            raise TransportError("replay", f"cannot read {path}: {e}") from e
        chunks = [data[i:i + chunk_size] for i in range(0, len(data), chunk_size)]
        return cls(chunks, delay_seconds=delay_seconds)

    @classmethod
    def from_text(cls, text: str, chunk_size: Optional[int] = None) -> ReplayTransport:
        data = text.encode("utf-8")
        if not chunk_size:
            return cls([data])
        return cls([data[i:i + chunk_size] for i in range(0, len(data), chunk_size)])

    @property
    def transport_name(self) -> str:
        return "replay"

    @property
    def is_open(self) -> bool:
        return self._open

    def start(self) -> bool:
        self._open = True
        logger.info("[REPLAY] Started: %d chunks", len(self._chunks))
        return True

    def stop(self) -> None:
        self._open = False

    def read_chunk(self) -> bytes:
        if not self._open or self._position >= len(self._chunks):
            return b""
        if self._delay and self._position:
            time.sleep(self._delay)
        chunk = self._chunks[self._position]
        self._position += 1
        return chunk

    def write(self, data: bytes) -> None:
        if not self._open:
            raise TransportError(self.transport_name, "not started")
        self.sent.append(data)

    @property
    def stats(self) -> Dict[str, Any]:
        return {
            "chunks": len(self._chunks),
            "position": self._position,
            "sent": len(self.sent),
        }
