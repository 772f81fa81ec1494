"""
Webinar Registration Backend - FastAPI Application

Serves the static registration site and stores each submitted form as a
MongoDB document.

Usage:
    python -m webinar

Environment Variables:
    VCAP_SERVICES: Cloud Foundry service bindings (takes priority)
    MONGO_URI: MongoDB connection string
    PORT: Listen port (default: 8080)
    DB_NAME: Database name (default: webinar)
    STATIC_DIR: Directory served at / (default: public)
    AWAIT_INSERT: Answer only after the insert completes (default: false)
    LOG_LEVEL: Logging level (default: INFO)
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from motor.motor_asyncio import AsyncIOMotorClient

from webinar import __version__
from webinar.config import Settings, resolve_settings
from webinar.database.connections import (
    close_connections,
    get_mongo_client,
    open_registration_store,
)
from webinar.routers import health, registration

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_app(
    settings: Settings, mongo_client: Optional[AsyncIOMotorClient] = None
) -> FastAPI:
    """
    Build the FastAPI application for the given settings.

    ``mongo_client`` replaces the client built from ``settings.mongo_uri``;
    the application does not close a client it was handed.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan manager.

        Startup:
        - Open the MongoDB client
        - Create the registrations collection if absent

        A store that cannot be opened is logged and the server keeps
        running; every registration then fails until restart.

        Shutdown:
        - Close the MongoDB client
        """
        app.state.mongo_client = None
        app.state.registrations = None
        try:
            client = mongo_client if mongo_client is not None else get_mongo_client(settings)
            app.state.mongo_client = client
            app.state.registrations = await open_registration_store(client, settings)
            logger.info("The database seems to be fine.")
        except Exception as e:
            logger.warning(f"Could not find or create the database! ({e})")

        yield

        if mongo_client is None:
            await close_connections()
            logger.info("Database connection closed")

    app = FastAPI(
        title="Webinar Registration",
        description="Stores webinar registrations submitted from the public form.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.mongo_client = None
    app.state.registrations = None

    app.include_router(health.router)
    app.include_router(registration.router)

    # Mounted last so API routes take precedence over files
    app.mount(
        "/",
        StaticFiles(directory=settings.static_dir, html=True, check_dir=False),
        name="static",
    )
    return app


def main() -> None:
    """Main entry point."""
    settings = resolve_settings()
    configure_logging(settings.log_level)
    app = create_app(settings)

    logger.info(f"Webinar registration server started on port {settings.port}....")
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
