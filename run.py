"""Entry point for the Lesson Hub API.

Starts the FastAPI application with Uvicorn.  Host, port, MongoDB
connection string and database name are read from the environment
(see ``lesson_hub_api/app/core/config.py``).  If the database cannot be
reached during startup, the process exits with a non‑zero status.

Usage:
    python run.py
"""
import asyncio
import logging
import sys

from uvicorn import Config, Server

from lesson_hub_api.app.core.config import settings


STARTUP_FAILURE = 3


async def run_api() -> bool:
    """Serve the API until shutdown.

    Returns ``True`` if the application started successfully.
    """
    config = Config(
        app="lesson_hub_api.app.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()
    return server.started


def main() -> None:
    started = asyncio.run(run_api())
    if not started:
        logging.getLogger(__name__).error("Lesson Hub API failed to start")
        sys.exit(STARTUP_FAILURE)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        pass
