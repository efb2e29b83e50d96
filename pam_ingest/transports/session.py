"""SerialSession - read loop entre el transporte y el decoder.

Flujo:
    transport.read_chunk() → UTF-8 incremental → LineFramer → decoder.ingest()

El único punto de suspensión es la espera del siguiente chunk. Las líneas
se procesan estrictamente en orden de llegada. Al terminar el stream
(o ante un error del transporte) se vacía el fragmento pendiente.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Union

from ..core.framing.line_framer import ChunkTextDecoder, LineFramer
from ..core.pipeline.decoder import TelemetryDecoder
from .base import TelemetryTransport, TransportError

logger = logging.getLogger(__name__)


class SerialSession:
    def __init__(self, transport: TelemetryTransport, decoder: TelemetryDecoder):
        self._transport = transport
        self._decoder = decoder
        self._framer = LineFramer()
        self._text = ChunkTextDecoder()
        self._running = False
        self._chunks = 0
        self._lines = 0

    @property
    def transport(self) -> TelemetryTransport:
        return self._transport

    @property
    def decoder(self) -> TelemetryDecoder:
        return self._decoder

    @property
    def is_running(self) -> bool:
        return self._running

    def feed(self, chunk: Union[bytes, str]) -> int:
        """Frame one chunk and ingest every completed line; returns the line count."""
        text = self._text.decode(chunk) if isinstance(chunk, bytes) else chunk
        return self._ingest_lines(self._framer.feed(text))

    def finish(self) -> int:
        """End of stream: flush the decoder tail and any buffered partial line."""
        count = self._ingest_lines(self._framer.feed(self._text.finish()))
        return count + self._ingest_lines(self._framer.flush())

    def _ingest_lines(self, lines) -> int:
        for line in lines:
            self._decoder.ingest(line)
        self._lines += len(lines)
        return len(lines)

    async def run(self) -> None:
        """Read until the transport signals termination."""
        self._running = True
        logger.info("[SESSION] Read loop started (%s)", self._transport.transport_name)
        try:
            while self._running:
                chunk = await asyncio.to_thread(self._transport.read_chunk)
                if not chunk:
                    break
                self._chunks += 1
                self.feed(chunk)
        except TransportError as e:
            logger.error("[SESSION] Read error: %s", e)
            self._decoder.note(f"⚠️ Read error: {e}")
        finally:
            self.finish()
            self._running = False
            logger.info(
                "[SESSION] Read loop ended: chunks=%d lines=%d", self._chunks, self._lines,
            )

    def stop(self) -> None:
        self._running = False
        self._transport.stop()

    @property
    def stats(self) -> dict:
        return {
            "running": self._running,
            "transport": self._transport.transport_name,
            "transport_stats": self._transport.stats,
            "chunks": self._chunks,
            "lines": self._lines,
            "pending": self._framer.pending,
        }


async def run_session(transport: TelemetryTransport, decoder: TelemetryDecoder) -> Optional[SerialSession]:
    """Open the transport and run a session to completion."""
    if not transport.start():
        logger.error("[SESSION] Transport %s did not start", transport.transport_name)
        return None
    session = SerialSession(transport, decoder)
    try:
        await session.run()
    finally:
        transport.stop()
    return session
