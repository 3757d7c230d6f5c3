"""Error taxonomy and HTTP exception handlers."""

import logging

from fastapi import FastAPI, status
from fastapi.responses import PlainTextResponse
from starlette.requests import Request

logger = logging.getLogger(__name__)


class SignupError(Exception):
    """Base class for errors surfaced by the signup endpoint."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_message = "Erreur lors de l'inscription"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message


class ValidationError(SignupError):
    """A required signup field is missing or empty."""

    status_code = status.HTTP_400_BAD_REQUEST
    public_message = "Tous les champs sont requis."


class DuplicateEmailError(SignupError):
    """The email is already registered."""

    status_code = status.HTTP_400_BAD_REQUEST
    public_message = "Cet email est déjà utilisé."


class InternalError(SignupError):
    """Any failure the caller must not see the details of."""


class StoreError(Exception):
    """Base class for user store failures."""


class StoreUnavailable(StoreError):  # noqa: N818
    """The database cannot be reached."""


class DuplicateKeyError(StoreError):
    """A write violated the unique email index."""


class HashingError(Exception):
    """The password hashing primitive failed."""


async def signup_error_handler(request: Request, exc: SignupError) -> PlainTextResponse:
    """Render a signup error as plain text with its public message only."""
    # InternalError causes are already logged with their traceback where they were caught
    log_level = logging.DEBUG if isinstance(exc, InternalError) else logging.WARNING
    logger.log(log_level, f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return PlainTextResponse(exc.public_message, status_code=exc.status_code)


def internal_error_response(request: Request, exc: Exception) -> PlainTextResponse:
    """Log an unexpected error and build the generic 500 answer."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return PlainTextResponse(
        InternalError.public_message,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error handlers to the application."""
    app.add_exception_handler(SignupError, signup_error_handler)
