"""Entry point for the TaskMaster Pro API server.

This script serves the FastAPI application with Uvicorn.  It is
intended to be executed from the project root::

    python run.py

Host and port are read from the ``HOST`` and ``PORT`` environment
variables (defaults ``0.0.0.0`` and ``3001``).  Hotfix toggles and the
other settings are described in ``taskmaster_api.app.core.config``.
"""
import asyncio
import logging

from uvicorn import Config, Server

from taskmaster_api.app.core.config import settings
from taskmaster_api.app.main import app


async def run_api() -> None:
    """Start the API server using Uvicorn."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info(
        "TaskMaster Pro API on http://%s:%s/api (health check at /health)",
        settings.host,
        settings.port,
    )
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass
