import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError

from social_api.core.config import Settings, settings as default_settings
from social_api.core.deps import require_token
from social_api.core.exceptions import (
    AppException,
    app_exception_handler,
    validation_exception_handler,
    generic_exception_handler,
)
from social_api.db.session import Database
from social_api.services.auth import TokenService
from social_api.api.v1 import health, users, thoughts, reactions

# Configure logging
log_level = logging.DEBUG if default_settings.ENV == "development" else logging.INFO
logging.basicConfig(
    level=log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# Suppress verbose logging from third-party libraries
noisy_loggers = [
    "passlib",
    "httpx",
    "httpcore",
    "multipart",
    "python_multipart",
]
for logger_name in noisy_loggers:
    logging.getLogger(logger_name).setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the API for one configuration.

    The store and the token service are opened in the lifespan, kept on
    ``app.state`` for the dependencies, and closed on shutdown.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.PROJECT_NAME} in {settings.ENV} mode")
        database = Database(settings)
        database.create_all()
        app.state.database = database
        app.state.token_service = TokenService.from_settings(settings)
        yield
        logger.info("Shutting down...")
        database.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Users, thoughts and reactions for a small social network",
        version="0.1.0",
        docs_url="/docs" if settings.ENV == "development" else None,
        redoc_url="/redoc" if settings.ENV == "development" else None,
        lifespan=lifespan,
    )

    # Register exception handlers
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Requested-With"],
    )

    gated = [Depends(require_token)] if settings.AUTH_REQUIRED else []
    if not settings.AUTH_REQUIRED:
        logger.warning("AUTH_REQUIRED is off, every route is public")

    app.include_router(health.router, prefix=settings.API_PREFIX)
    app.include_router(users.router, prefix=settings.API_PREFIX, dependencies=gated)
    app.include_router(thoughts.router, prefix=settings.API_PREFIX, dependencies=gated)
    app.include_router(reactions.router, prefix=settings.API_PREFIX, dependencies=gated)

    @app.get("/")
    def read_root():
        """Root endpoint - basic API status."""
        return {
            "message": "OK",
            "service": settings.PROJECT_NAME,
            "version": "0.1.0",
        }

    return app


app = create_app()


def run():
    import uvicorn

    uvicorn.run(
        "social_api.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=False,
    )


if __name__ == "__main__":
    run()
