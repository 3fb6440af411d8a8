"""Command endpoints the GUI shell calls into."""

from fastapi import APIRouter, HTTPException, Request
from pydantic import ValidationError

from ...core.exceptions import UnknownCommand
from ...core.logging_config import get_logger
from ..schemas.commands import CommandRequest, CommandResponse
from ..services.command_surface import CommandSurface

router = APIRouter(prefix="/commands", tags=["commands"])
logger = get_logger(__name__)


def _surface(request: Request) -> CommandSurface:
    return request.app.state.command_surface


@router.get("/")
async def list_commands(request: Request) -> dict[str, list[str]]:
    return {"commands": _surface(request).names}


@router.post("/{name}", response_model=CommandResponse)
async def invoke_command(name: str, payload: CommandRequest, request: Request) -> CommandResponse:
    surface = _surface(request)
    try:
        response = await surface.invoke(name, payload.arguments)
    except UnknownCommand as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(
            status_code=422, detail=exc.errors(include_url=False, include_context=False)
        ) from exc

    logger.info("command_invoked", command=name, ok=response.ok)
    return response
