"""TelemetryTransport - interface base para las fuentes de bytes del PAM.

Define el contrato común de serial y replay. El decoder nunca habla con
el transporte directamente: la sesión lee chunks y el CommandSender escribe.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict


class TransportError(Exception):
    """Fallo del transporte (apertura, lectura o escritura)."""

    def __init__(self, transport: str, message: str):
        self.transport = transport
        super().__init__(f"{transport}: {message}")


class TelemetryTransport(ABC):
    """Interface común para todos los transportes.

    ``read_chunk`` bloquea hasta tener datos; devolver ``b""`` señala fin
    del stream.
    """

    @abstractmethod
    def start(self) -> bool:
        """Abre el transporte.

        Returns:
            True si quedó abierto
        """

    @abstractmethod
    def stop(self) -> None:
        """Cierra el transporte; un ``read_chunk`` en curso termina con b''."""

    @abstractmethod
    def read_chunk(self) -> bytes:
        """Siguiente chunk de bytes (longitud arbitraria > 0), o b'' al terminar."""

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Escribe bytes hacia el dispositivo (fire-and-forget)."""

    @property
    @abstractmethod
    def transport_name(self) -> str:
        """Nombre del transporte: serial, replay."""

    @property
    def is_open(self) -> bool:
        return False

    @property
    def stats(self) -> Dict[str, Any]:
        return {}
