"""Serial transport for the PAM over a USB-UART bridge (CP210x)."""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional

import serial

from .base import TelemetryTransport, TransportError

logger = logging.getLogger(__name__)


class SerialTransport(TelemetryTransport):
    """pyserial-backed transport.

    Reads use a short timeout so ``stop()`` from another thread ends the
    read loop promptly; a timeout with no data is not end of stream.
    """

    def __init__(
        self,
        port: str,
        baud_rate: int = 115200,
        chunk_size: int = 4096,
        read_timeout: float = 0.5,
    ):
        self.port = port
        self.baud_rate = baud_rate
        self.chunk_size = chunk_size
        self.read_timeout = read_timeout
        self._serial: Optional[serial.Serial] = None
        self._running = False
        self._write_lock = threading.Lock()
        self._bytes_read = 0
        self._bytes_written = 0

    @property
    def transport_name(self) -> str:
        return "serial"

    @property
    def is_open(self) -> bool:
        return self._serial is not None and self._serial.is_open

    def start(self) -> bool:
        logger.info("[SERIAL] Opening %s at %d baud", self.port, self.baud_rate)
        try:
            self._serial = serial.Serial(self.port, self.baud_rate, timeout=self.read_timeout)
        except (serial.SerialException, ValueError) as e:
            raise TransportError(self.transport_name, f"failed to open {self.port}: {e}") from e
        self._running = True
        return True

    def stop(self) -> None:
        self._running = False
        port, self._serial = self._serial, None
        if port is not None:
            try:
                # Unblock a reader thread still inside port.read
                port.cancel_read()
                port.close()
            except (serial.SerialException, OSError) as e:
                logger.warning("[SERIAL] Error closing %s: %s", self.port, e)
            logger.info("[SERIAL] Closed %s. %s", self.port, self.stats)

    def read_chunk(self) -> bytes:
        while self._running:
            port = self._serial
            if port is None:
                break
            try:
                data = port.read(max(1, min(port.in_waiting, self.chunk_size)))
            except (serial.SerialException, OSError) as e:
                if not self._running:
                    break
                raise TransportError(self.transport_name, f"read failed: {e}") from e
            if data:
                self._bytes_read += len(data)
                return data
        return b""

    def write(self, data: bytes) -> None:
        port = self._serial
        if port is None:
            raise TransportError(self.transport_name, "port not open")
        try:
            with self._write_lock:
                port.write(data)
                port.flush()
        except (serial.SerialException, OSError) as e:
            raise TransportError(self.transport_name, f"write failed: {e}") from e
        self._bytes_written += len(data)

    @property
    def stats(self) -> Dict[str, Any]:
        return {
            "port": self.port,
            "baud_rate": self.baud_rate,
            "open": self.is_open,
            "bytes_read": self._bytes_read,
            "bytes_written": self._bytes_written,
        }
