"""Entry point for the Reference Values API.

Serves the FastAPI application with Uvicorn on ``HOST``:``PORT``
(``localhost:8081`` by default).  Configuration is read from environment
variables; see ``reference_values_api/app/core/config.py``.

Usage:
    API_TOKENS=secret python run.py
"""
import asyncio
import sys

from uvicorn import Config, Server

from reference_values_api.app.core.config import settings
from reference_values_api.app.main import app


async def main() -> bool:
    """Run the API server until it is stopped.

    Returns ``False`` if the application failed to start, for example
    because the data file could not be loaded.
    """
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, lifespan="on", log_level=settings.log_level.lower())
    server = Server(config)
    await server.serve()
    return server.started


if __name__ == "__main__":
    try:
        started = asyncio.run(main())
    except KeyboardInterrupt:
        started = True
    if not started:
        sys.exit(1)
