"""Entry point for the Consultant Directory API.

This script serves the FastAPI application with uvicorn.  Host, port,
database location and the other options are read from environment
variables (see ``consultant_directory_api/app/core/config.py``), for
example::

    PORT=3001 DATABASE_URL=/var/lib/consultants.db python run.py

Uvicorn handles SIGINT/SIGTERM: in‑flight requests finish, then the
application's shutdown hook closes the database.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from consultant_directory_api.app.core.config import settings
from consultant_directory_api.app.main import app


logger = logging.getLogger("consultant_directory_api")


async def run_api() -> None:
    """Start the API using Uvicorn and block until it shuts down."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    base_url = f"http://localhost:{settings.port}"
    logger.info("Consultant API server running on port %s", settings.port)
    logger.info("Health check: %s/api/health", base_url)
    logger.info("API endpoints available at %s/api/", base_url)
    await server.serve()
    logger.info("Shutting down gracefully...")


def main() -> None:
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass


if __name__ == "__main__":
    main()
