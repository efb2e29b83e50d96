from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .common.config import Settings, get_settings
from .core.pipeline.decoder import TelemetryDecoder
from .endpoints import (
    commands_router,
    export_router,
    health_router,
    readings_router,
    schema_router,
)
from .transports.commands import CommandSender
from .transports.session import SerialSession

logger = logging.getLogger(__name__)


def create_app(
    decoder: Optional[TelemetryDecoder] = None,
    session: Optional[SerialSession] = None,
    commands: Optional[CommandSender] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the HTTP app around one decoder.

    When a session is given its read loop runs as a background task for the
    lifetime of the app; the transport must already be started.
    """
    settings = settings or get_settings()
    decoder = decoder or (session.decoder if session else TelemetryDecoder.from_settings(settings))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        task = None
        if session is not None and not session.is_running:
            task = asyncio.create_task(session.run())
            logger.info("[API] Read loop attached to %s", session.transport.transport_name)
        try:
            yield
        finally:
            if session is not None:
                session.stop()
            if task is not None:
                await task

    app = FastAPI(title="PAM Serial Ingest", version="0.1.0", lifespan=lifespan)
    app.state.decoder = decoder
    app.state.session = session
    app.state.commands = commands
    app.state.api_key = settings.api_key

    app.include_router(health_router)
    app.include_router(schema_router)
    app.include_router(readings_router)
    app.include_router(export_router)
    app.include_router(commands_router)
    return app


app = create_app()
