"""Comandos de operador hacia el dispositivo."""

from fastapi import APIRouter, Depends, HTTPException

from ..auth import require_api_key
from ..dependencies import get_command_sender
from ..schemas import CommandIn, CommandResultOut, CommandsOut, QuickCommandOut
from ..transports.commands import QUICK_COMMANDS, NewlineMode

router = APIRouter(tags=["commands"])


@router.get("/commands", response_model=CommandsOut)
def list_commands(commands=Depends(get_command_sender)):
    return CommandsOut(
        connected=bool(commands and commands.is_connected),
        newline=commands.newline.value if commands else None,
        quick_commands=[QuickCommandOut(**c.to_dict()) for c in QUICK_COMMANDS],
    )


@router.post(
    "/commands",
    response_model=CommandResultOut,
    dependencies=[Depends(require_api_key)],
)
def send_command(payload: CommandIn, commands=Depends(get_command_sender)):
    if commands is None:
        raise HTTPException(status_code=503, detail="No transport connected")

    if payload.newline is not None:
        try:
            commands.newline = NewlineMode.parse(payload.newline)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))

    sent = commands.send(payload.command)
    return CommandResultOut(sent=sent, payload=payload.command + commands.newline.suffix)
