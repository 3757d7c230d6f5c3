"""Signup form and registration endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import FileResponse, PlainTextResponse

from rencontre_repas.api.dependencies import get_app_settings, get_signup_service, parse_signup_form
from rencontre_repas.config import Settings
from rencontre_repas.schemas.signup import SignupRequest
from rencontre_repas.services.signup import SignupService

router = APIRouter(tags=["signup"])

SIGNUP_SUCCESS_MESSAGE = "Inscription réussie"


@router.api_route("/", methods=["GET", "HEAD"], response_class=FileResponse)
async def signup_form(settings: Annotated[Settings, Depends(get_app_settings)]):
    """Serve the signup form."""
    return FileResponse(settings.signup_form_path, media_type="text/html")


@router.post("/signup", response_class=PlainTextResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    form: Annotated[SignupRequest, Depends(parse_signup_form)],
    service: Annotated[SignupService, Depends(get_signup_service)],
):
    """Register a new user account."""
    await service.register(form)
    return PlainTextResponse(SIGNUP_SUCCESS_MESSAGE, status_code=status.HTTP_201_CREATED)
