"""
Main entrypoint for the Venture Connect API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  ``create_app`` builds and configures the
app, which is then instantiated at module import time as ``app`` so
it can be served directly, e.g.::

    uvicorn venture_connect_api.app.main:app --reload

The store is created once per application.  Callers (tests in
particular) may pass their own; otherwise one is built from settings
when the application starts.
"""

import logging
from typing import Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .core.seed import seed_store
from .storage import Store, build_store

logger = logging.getLogger(__name__)


def create_app(config: Optional[Settings] = None, store: Optional[Store] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    config : Optional[Settings]
        Settings to use instead of the environment-derived defaults.
    store : Optional[Store]
        A ready store.  When omitted, ``build_store`` creates one from
        ``config`` on startup.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    config = config or default_settings
    # Initialise logging before anything else so that startup can log.
    setup_logging(config.log_level, config.log_file or None)

    app = FastAPI(title=config.project_name, version=config.api_version, debug=config.debug)
    app.state.settings = config
    app.state.store = store

    # Mount versioned routes under /api/v1.
    app.include_router(v1_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event() -> None:
        if app.state.store is None:
            app.state.store = build_store(config)
        if config.seed_on_startup:
            seed_store(app.state.store)
        logger.info("%s %s started", config.project_name, config.api_version)

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        if app.state.store is not None:
            app.state.store.close()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
