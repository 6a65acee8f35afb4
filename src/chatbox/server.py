"""
Chatbox - Main Server

Frontend-facing API for the chat application:
- Account signup and login (JWT)
- Admin account management
- Chat proxy to the external completion API
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from . import __version__
from .api import admin_router, user_router
from .completion_client import CompletionClient
from .config import Settings
from .core.exceptions import ChatboxException
from .database import create_engine, create_session_maker, init_db
from .log import setup_logging


def register_error_handlers(app: FastAPI) -> None:
    """Turn errors into ``{"message": ...}`` JSON responses."""

    @app.exception_handler(ChatboxException)
    async def handle_chatbox_error(request: Request, exc: ChatboxException):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path}: {exc.message}")
        else:
            logger.debug(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(SQLAlchemyError)
    async def handle_storage_error(request: Request, exc: SQLAlchemyError):
        logger.exception(f"Storage error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"message": "Storage error"})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        # Details go to the log only
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"message": "Internal Server Error"})


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    await init_db(app.state.engine)
    logger.info("Chatbox started")
    yield
    if app.state.owns_completion_client:
        await app.state.completion_client.close()
    await app.state.engine.dispose()
    logger.info("Chatbox shutting down")


def create_app(
    settings: Optional[Settings] = None,
    completion_client: Optional[CompletionClient] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Configuration, read from the environment when omitted
        completion_client: Completion API client, built from ``settings`` when omitted
    """
    settings = settings or Settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Chatbox",
        description="Chat backend with account management and a completion API proxy",
        version=__version__,
        lifespan=lifespan,
    )

    engine = create_engine(settings.DATABASE_URL)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_maker = create_session_maker(engine)
    app.state.owns_completion_client = completion_client is None
    app.state.completion_client = completion_client or CompletionClient.from_settings(settings)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(admin_router)
    app.include_router(user_router)

    # Health check
    @app.get("/health", tags=["health"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok", "version": __version__}

    return app


def run():
    """Run the server."""
    import uvicorn

    settings = Settings()
    uvicorn.run(
        "chatbox.server:create_app",
        factory=True,
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD,
    )


if __name__ == "__main__":
    run()
