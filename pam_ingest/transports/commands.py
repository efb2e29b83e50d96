"""Comandos de operador hacia el PAM.

El firmware usa menús de una letra (``m`` menú, ``k`` header, ``x`` salir).
Los comandos son fire-and-forget: un fallo de escritura se anota en el raw
log y se reporta al llamador, nunca se propaga.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..core.pipeline.decoder import TelemetryDecoder
from .base import TelemetryTransport, TransportError

logger = logging.getLogger(__name__)


class NewlineMode(Enum):
    NONE = "none"
    CR = "cr"
    LF = "lf"
    CRLF = "crlf"

    @property
    def suffix(self) -> str:
        return _SUFFIXES[self]

    @classmethod
    def parse(cls, value: str) -> NewlineMode:
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown newline mode: {value!r}") from None


_SUFFIXES = {
    NewlineMode.NONE: "",
    NewlineMode.CR: "\r",
    NewlineMode.LF: "\n",
    NewlineMode.CRLF: "\r\n",
}


@dataclass(frozen=True)
class QuickCommand:
    label: str
    command: str
    confirm: Optional[str] = None

    def to_dict(self) -> dict:
        return {"label": self.label, "command": self.command, "confirm": self.confirm}


QUICK_COMMANDS: Tuple[QuickCommand, ...] = (
    QuickCommand("Menu (m)", "m"),
    QuickCommand("Help (?)", "?"),
    QuickCommand("Header (k)", "k"),
    QuickCommand("Exit (x)", "x"),
    QuickCommand("Toggle Cellular (d)", "d"),
    QuickCommand("Toggle Wi-Fi (g)", "g"),
    QuickCommand("Restart (u)", "u", confirm="Restart ESP now?"),
    QuickCommand("List SD (p)", "p"),
    QuickCommand("Delete on SD (q)", "q"),
)


class CommandSender:
    def __init__(
        self,
        transport: Optional[TelemetryTransport],
        decoder: TelemetryDecoder,
        newline: NewlineMode = NewlineMode.CR,
    ):
        self._transport = transport
        self._decoder = decoder
        self.newline = newline
        self._sent = 0
        self._failed = 0

    @property
    def is_connected(self) -> bool:
        return self._transport is not None and self._transport.is_open

    def send(self, text: str) -> bool:
        """Write ``text`` plus the newline suffix; True if it reached the transport."""
        if not self.is_connected:
            logger.warning("[COMMANDS] Not connected, dropping %r", text)
            return False

        payload = text + self.newline.suffix
        try:
            self._transport.write(payload.encode("utf-8"))
        except TransportError as e:
            self._failed += 1
            logger.error("[COMMANDS] Write error: %s", e)
            self._decoder.note(f"⚠️ Write error: {e}")
            return False

        self._sent += 1
        self._decoder.note(f"→ {json.dumps(payload, ensure_ascii=False)}")
        logger.info("[COMMANDS] Sent %r", payload)
        return True

    @property
    def stats(self) -> dict:
        return {"sent": self._sent, "failed": self._failed, "newline": self.newline.value}
