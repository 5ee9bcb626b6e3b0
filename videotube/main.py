"""
Main FastAPI application for the VideoTube backend.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from videotube.config import LOG_LEVEL
from videotube.db import Database
from videotube.errors import ApiError
from videotube.middleware import LoggingMiddleware, RequestIDMiddleware
from videotube.responses import api_error
from videotube.routes.comments import router as comments_router
from videotube.routes.dashboard import router as dashboard_router
from videotube.routes.health import router as health_router
from videotube.routes.likes import router as likes_router
from videotube.routes.playlists import router as playlists_router
from videotube.routes.subscriptions import router as subscriptions_router
from videotube.routes.tweets import router as tweets_router
from videotube.routes.users import router as users_router
from videotube.routes.videos import router as videos_router
from videotube.services.media import MediaStore, MinioMediaStore

logger = logging.getLogger(__name__)


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("VideoTube API starting")
    yield
    app.state.database.dispose()


def create_app(
    database: Optional[Database] = None,
    media_store: Optional[MediaStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: Store client; built from DATABASE_URL when omitted
        media_store: Media client; a MinIO client from MEDIA_* settings when omitted

    Returns:
        Configured FastAPI app instance
    """
    app = FastAPI(
        title="VideoTube API",
        description="Backend for a video sharing platform",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.database = database if database is not None else Database()
    app.state.media_store = media_store if media_store is not None else MinioMediaStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        return api_error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            {"field": ".".join(str(p) for p in err.get("loc", ())), "message": err.get("msg", "")}
            for err in exc.errors()
        ]
        return api_error(400, "Invalid request", errors)

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        """Handle SQLAlchemy database errors."""
        logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
        return api_error(500, "Database operation failed")

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle all other unhandled exceptions."""
        logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
        return api_error(500, "An unexpected error occurred")

    app.include_router(users_router)
    app.include_router(videos_router)
    app.include_router(comments_router)
    app.include_router(likes_router)
    app.include_router(tweets_router)
    app.include_router(subscriptions_router)
    app.include_router(playlists_router)
    app.include_router(dashboard_router)
    app.include_router(health_router)

    @app.get("/")
    async def root():
        return {"message": "VideoTube API", "status": "healthy", "version": "1.0.0"}

    return app


configure_logging()

# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("videotube.main:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
