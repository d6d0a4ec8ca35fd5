import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from kickstart.config import get_settings
from kickstart.infrastructure.database import engine, initialize_database
from kickstart.interfaces.api.routes import register_routes


def configure_logging() -> None:
    """Apply the configured log level to the root logger."""

    level = getattr(logging, get_settings().log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the tables on startup and release the pool on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    configure_logging()
    app = FastAPI(title="Kickstart API", lifespan=lifespan)
    register_routes(app)
    return app


app = create_app()
