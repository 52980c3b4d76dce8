"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from wedding_songs.core.catalog import SongCatalog

from . import __version__
from .config import settings
from .routes import health, songs, submissions
from .routes.songs import set_storage
from .storage import MemoryStorage

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan.

    Args:
        app: FastAPI application

    Yields:
        None
    """
    # Startup
    catalog = SongCatalog.load(settings.WS_CATALOG_PATH)
    logger.info(f"Loaded {len(catalog)} songs")
    set_storage(MemoryStorage(catalog))

    yield

    # Shutdown
    set_storage(None)


app = FastAPI(
    title="Wedding Songs Submission Service",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(health.router, prefix="/api")
app.include_router(songs.router, prefix="/api")
app.include_router(submissions.router, prefix="/api")


@app.get("/")
async def root() -> dict:
    """Root endpoint.

    Returns:
        Service info
    """
    return {
        "message": "Wedding Songs Submission Service",
        "version": __version__,
    }


def main(host: str = settings.WS_HOST, port: int = settings.WS_PORT) -> None:
    """Entry point for running the service directly."""
    import uvicorn

    uvicorn.run(
        "wedding_songs.server.main:app",
        host=host,
        port=port,
        reload=False,
    )


if __name__ == "__main__":
    main()
