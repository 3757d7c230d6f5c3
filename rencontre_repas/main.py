"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from rencontre_repas import __version__
from rencontre_repas.api import signup
from rencontre_repas.config import Settings, get_settings
from rencontre_repas.database import Database
from rencontre_repas.errors import register_exception_handlers
from rencontre_repas.logging_config import configure_logging
from rencontre_repas.security import SecurityHeadersMiddleware, build_content_security_policy
from rencontre_repas.services.hashing import PasswordHasher

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database on startup and close it on shutdown."""
    database: Database = app.state.database
    # A failed connection is logged by Database.connect; the server still starts
    if not database.is_connected:
        database.connect()
    yield
    database.close()


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the application with its settings and database."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Rencontre Repas",
        description="Signup form and account registration",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database or Database(settings.database_url)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)

    app.add_middleware(
        SecurityHeadersMiddleware,
        content_security_policy=build_content_security_policy(
            style_hosts=settings.csp_style_hosts,
            script_hosts=settings.csp_script_hosts,
        ),
    )
    register_exception_handlers(app)

    app.include_router(signup.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "environment": settings.environment}

    # Mounted last so the routes above take precedence over files
    app.mount("/", StaticFiles(directory=settings.static_dir, check_dir=False), name="static")

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    settings = get_settings()
    logger.info(f"Starting server on http://{settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
