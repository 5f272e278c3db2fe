"""
FastAPI Application Entry Point

This module builds the FastAPI application and configures:
- API routes and exception handlers
- Logging middleware
- The mapping store and shortening service, wired from Settings

Design Decisions:
- create_app() takes the resolved Settings explicitly; nothing below it
  reads the environment
- The url_mappings table is created on startup; if the database cannot be
  reached the startup fails and the process exits
"""

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from shortener.api import endpoints
from shortener.api.errors import add_exception_handlers
from shortener.api.schemas import HealthResponse
from shortener.core.setting import Settings, settings as default_settings
from shortener.db.session import create_engine, create_session_maker
from shortener.middleware.logging import add_logging_middleware
from shortener.services.mapping_store import MappingStore
from shortener.services.url_service import URLShorteningService

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application for the given settings.

    Args:
        settings: Resolved configuration; the environment-derived default
            settings are used when omitted

    Returns:
        FastAPI app with store and service attached to app.state
    """
    settings = settings or default_settings

    app = FastAPI(
        title="URL Shortener Service",
        description="Maps long URLs to short random codes and redirects back",
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    engine = create_engine(settings)
    store = MappingStore(engine, create_session_maker(engine))

    app.state.settings = settings
    app.state.store = store
    app.state.url_service = URLShorteningService(
        store,
        max_attempts=settings.SHORT_CODE_MAX_ATTEMPTS,
    )

    add_exception_handlers(app)
    add_logging_middleware(app)

    # Health endpoints defined before router to match before catch-all route
    @app.get("/", tags=["Health"])
    async def root():
        return {
            "message": "URL Shortener Service",
            "version": VERSION,
            "docs": "/docs"
        }

    @app.get("/health", tags=["Health"], response_model=HealthResponse)
    async def health_check():
        """Report whether the database is reachable."""
        if await store.ping():
            return HealthResponse(status="healthy")
        return JSONResponse(status_code=503, content={"status": "unhealthy"})

    app.include_router(endpoints.router, tags=["URL Shortener"])

    @app.on_event("startup")
    async def startup_event():
        await store.initialize()
        logger.info(f"Short URLs will be served under {settings.BASE_URL}")

    @app.on_event("shutdown")
    async def shutdown_event():
        await store.close()

    return app


app = create_app()


def run() -> None:
    """Serve the application on HOST:PORT."""
    logging.basicConfig(
        level=default_settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(f"Starting server at http://{default_settings.HOST}:{default_settings.PORT}")
    uvicorn.run(
        app,
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_level=default_settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
