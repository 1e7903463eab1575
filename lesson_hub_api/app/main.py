"""
Main entrypoint for the Lesson Hub API.

This module assembles the FastAPI application: logging, CORS, the
request logger, error handlers and routers.  The ``create_app``
function builds and configures the app, which is then instantiated at
module import time as ``app``, so it can be served with::

    uvicorn lesson_hub_api.app.main:app --reload

The document store is created and connected by the startup hook
unless one is passed to ``create_app`` (tests pass an in‑memory
store).  If the initial connection fails, startup fails and the
server process exits.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional, Union

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.endpoints import health, images
from .api.router import router as api_router
from .core.config import settings
from .core.db import DocumentStore
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .core.request_logging import register_request_logging


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the document store on startup and close it on shutdown."""
    if app.state.store is None:
        app.state.store = DocumentStore(settings.mongodb_uri, settings.database_name)
    try:
        await app.state.store.connect()
    except Exception:
        logger.critical("MongoDB connection error; shutting down")
        raise

    yield

    await app.state.store.close()


def create_app(
    store: Optional[DocumentStore] = None,
    images_dir: Optional[Union[str, Path]] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[DocumentStore]
        Document store to use.  When omitted, a ``DocumentStore`` is
        built from ``settings`` and connected on startup.
    images_dir : Optional[str | Path]
        Root directory for static images.  Defaults to
        ``settings.images_path``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that the setup below
    # can log messages.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.images_dir = Path(images_dir) if images_dir is not None else settings.images_path

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Added after CORS so that it wraps every other stage.
    register_request_logging(app, log_bodies=settings.log_request_bodies)
    register_exception_handlers(app)

    app.include_router(api_router, prefix="/api")
    app.include_router(images.router, prefix="/images", tags=["images"])
    app.include_router(health.router, tags=["health"])

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
