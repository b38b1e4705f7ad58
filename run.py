"""Entry point for the Pet Catalog API.

Serves ``pet_catalog.app.main:app`` with Uvicorn.  Host and port are
read from the environment variables ``API_HOST`` and ``API_PORT``
(defaults ``0.0.0.0`` and ``8000``); database location and log level
come from the settings in ``pet_catalog.app.core.config``.

Usage:
    python run.py
"""
import asyncio
import os

from uvicorn import Config, Server

from pet_catalog.app.main import app
from pet_catalog.app.core.config import settings


async def run_api() -> None:
    """Start the API using Uvicorn."""
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass
