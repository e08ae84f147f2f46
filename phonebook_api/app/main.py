"""
Main entrypoint for the Phone Book API.

This module assembles the FastAPI application, sets up logging and
includes the versioned router.  The ``create_app`` function builds
and configures the app, which is then instantiated at module import
time as ``app``::

    uvicorn phonebook_api.app.main:app --reload
"""

from fastapi import FastAPI

from .core.config import settings
from .core.logging_config import setup_logging
from .api.v1.router import router as v1_router
from .core.db import init_db


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Logging is configured first, then the company and person routes
    are mounted below ``settings.api_prefix``.  The database schema is
    created when the application starts.
    """
    setup_logging(settings.log_level, settings.log_file or None, debug=settings.debug)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.include_router(v1_router, prefix=settings.api_prefix)

    @app.on_event("startup")
    async def startup_event() -> None:
        init_db()

    return app


app = create_app()
