"""Entry point for serving the Venture Connect API.

Host and port come from the ``API_HOST`` and ``API_PORT`` environment
variables (defaults ``0.0.0.0`` and ``8000``).  Everything else
(storage backend, database path, secret key, seeding) is read by
``venture_connect_api.app.core.config``; see that module for the
supported variables.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from venture_connect_api.app.main import app


async def main() -> None:
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level="info")
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Server stopped")
