"""Entry point for the Contact Management API.

Starts the FastAPI application with Uvicorn.  Host, port and log level
come from the same environment variables the application reads (see
``contact_manager_api.app.core.config``): ``HOST`` (default ``0.0.0.0``),
``PORT`` (default ``3000``) and ``LOG_LEVEL``.

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from contact_manager_api.app.core.config import settings
from contact_manager_api.app.main import app


async def run_api() -> None:
    """Serve the API until the process is interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass
