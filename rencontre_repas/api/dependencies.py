"""FastAPI dependencies for settings, database and services."""

import json
import logging
from typing import Annotated

from fastapi import Depends, Request
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from rencontre_repas.config import Settings
from rencontre_repas.database import get_db
from rencontre_repas.errors import ValidationError
from rencontre_repas.schemas.signup import SignupRequest
from rencontre_repas.services.hashing import PasswordHasher
from rencontre_repas.services.signup import SignupService
from rencontre_repas.services.user_store import UserStore

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_password_hasher(request: Request) -> PasswordHasher:
    """Get the process-wide password hasher."""
    return request.app.state.password_hasher


def get_user_store(
    db: Annotated[Session | None, Depends(get_db)],
) -> UserStore:
    """Get a user store bound to the request's session."""
    return UserStore(db)


def get_signup_service(
    store: Annotated[UserStore, Depends(get_user_store)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> SignupService:
    """Get signup service with dependencies."""
    return SignupService(store, hasher)


async def parse_signup_form(request: Request) -> SignupRequest:
    """Read a signup submission from a JSON or form-encoded body."""
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.split(";")[0].strip().lower() == "application/json":
            data = await request.json()
        else:
            data = dict(await request.form())
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning(f"Unreadable signup body: {e}")
        raise ValidationError("Unreadable request body") from e

    if not isinstance(data, dict):
        raise ValidationError("Request body must be an object")

    try:
        return SignupRequest.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid signup fields: {e.error_count()} error(s)") from e
