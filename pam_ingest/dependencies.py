from __future__ import annotations

from typing import Optional

from fastapi import Request

from .core.pipeline.decoder import TelemetryDecoder
from .transports.commands import CommandSender
from .transports.session import SerialSession


def get_decoder(request: Request) -> TelemetryDecoder:
    return request.app.state.decoder


def get_session(request: Request) -> Optional[SerialSession]:
    return getattr(request.app.state, "session", None)


def get_command_sender(request: Request) -> Optional[CommandSender]:
    return getattr(request.app.state, "commands", None)
