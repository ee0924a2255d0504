"""
Local Notifications Manager - Application Entry Point

Schedule, list and cancel local notifications over HTTP.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from local_notifications import __version__
from local_notifications.core.config import get_settings
from local_notifications.core.logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    settings = get_settings()
    logger.info(f"Starting Local Notifications Manager in {settings.ENVIRONMENT} mode...")

    if settings.PERSIST_REPEAT_INTERVALS:
        from local_notifications.infrastructure.local.database import init_db

        await init_db()

    from local_notifications.api.deps import get_notification_service

    service = get_notification_service()
    await service.start()

    yield

    # Shutdown
    logger.info("Shutting down Local Notifications Manager...")
    await service.aclose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Local Notifications Manager",
        description="Schedule, list and cancel local notifications",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    from local_notifications.api import notifications, realtime

    app.include_router(notifications.router, prefix="/api/notifications", tags=["notifications"])
    app.include_router(realtime.router, prefix="/api/realtime", tags=["realtime"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "version": __version__,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "local_notifications.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
