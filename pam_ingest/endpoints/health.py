"""Health and stats endpoints."""

from fastapi import APIRouter, Depends

from ..core.pipeline.decoder import TelemetryDecoder
from ..dependencies import get_command_sender, get_decoder, get_session

router = APIRouter(tags=["health"])


@router.get("/health")
def health(session=Depends(get_session)):
    """Liveness probe: ok while the process is running."""
    return {
        "status": "ok",
        "session_running": bool(session and session.is_running),
    }


@router.get("/stats")
def stats(
    decoder: TelemetryDecoder = Depends(get_decoder),
    session=Depends(get_session),
    commands=Depends(get_command_sender),
):
    """Contadores del decoder, la sesión y los comandos."""
    return {
        "decoder": decoder.stats,
        "session": session.stats if session else None,
        "commands": commands.stats if commands else None,
    }
