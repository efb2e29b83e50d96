"""Transports - fuentes de bytes, read loop y comandos de operador."""

from .base import TelemetryTransport, TransportError
from .commands import QUICK_COMMANDS, CommandSender, NewlineMode, QuickCommand
from .replay import ReplayTransport
from .session import SerialSession, run_session

__all__ = [
    "TelemetryTransport",
    "TransportError",
    "QUICK_COMMANDS",
    "CommandSender",
    "NewlineMode",
    "QuickCommand",
    "ReplayTransport",
    "SerialSession",
    "run_session",
]
