"""
Primary FastAPI application entry point
"""
import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from empmovies.api.api import api_router, root_router
from empmovies.api.deps import close_connections, initialize_connections
from empmovies.api.errors import register_exception_handlers
from empmovies.core.config import Settings, get_settings
from empmovies.data_access.mongo_client import Stores

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stdout,
    )


def create_app(settings: Optional[Settings] = None, stores: Optional[Stores] = None) -> FastAPI:
    """
    Builds the application.

    Args:
        settings: Configuration; defaults to the cached environment settings.
        stores: Pre-built store handles. When given, the lifespan neither opens
            nor closes connections (tests pass in-memory stores this way).
    """
    settings = settings or get_settings()
    owns_stores = stores is None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        if owns_stores:
            logger.info("Application startup: Initializing connections...")
            app.state.stores = await initialize_connections(settings)
        yield
        # Shutdown
        if owns_stores:
            logger.info("Application shutdown: Closing connections...")
            await close_connections(app.state.stores)
            app.state.stores = None

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.stores = stores

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(api_router, prefix="/api")
    app.include_router(root_router)
    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured port."""
    import uvicorn

    settings = get_settings()
    logger.info(f"Starting {settings.PROJECT_NAME} on port {settings.PORT}...")
    uvicorn.run("empmovies.server:app", host="0.0.0.0", port=settings.PORT)


configure_logging(get_settings().LOG_LEVEL)
app = create_app()

# For local development
if __name__ == "__main__":
    run()
