"""
Liveness and token smoke-test endpoints.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse, PlainTextResponse

from app.api.auth import CurrentUser
from app.api.responses import send_success
from app.schemas.user import UserOut

router = APIRouter()


@router.get("/ping", response_class=PlainTextResponse, summary="Liveness check, no auth")
async def ping() -> str:
    return "pong"


@router.get("/protected", summary="Echo the resolved user")
async def protected(current_user: CurrentUser) -> JSONResponse:
    return send_success("token verified successfully", {"user": UserOut.model_validate(current_user)})
