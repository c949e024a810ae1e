"""
Main entrypoint for the Contact Management API.

This module assembles the FastAPI application, sets up logging,
registers the envelope-producing exception handlers and includes the
API router.  The ``create_app`` function builds and configures the app,
which is then instantiated at module import time as ``app``.  Importing
the app here makes it easy to run with uvicorn or another ASGI server,
e.g.::

    uvicorn contact_manager_api.app.main:app --reload

The SQLite connection is opened on startup, wrapped in a
``ContactStore`` and stored on ``app.state``; it is closed on shutdown.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.db import init_db, open_connection
from .core.logging_config import setup_logging
from .schemas.response import ErrorMessage, ResponseCode, send_response
from .services.contact_service import ContactStore

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = {"name", "phone"}


def validation_message(exc: RequestValidationError) -> str:
    """Pick the envelope message for a request that failed validation."""
    for error in exc.errors():
        loc = tuple(error.get("loc", ()))
        if loc and loc[0] == "path":
            return ErrorMessage.INVALID_CONTACT_ID
    for error in exc.errors():
        loc = tuple(error.get("loc", ()))
        # A missing body is reported at ("body",).
        if loc == ("body",) and error.get("type") == "missing":
            return ErrorMessage.REQUIRED_FIELD_MISSING
        if len(loc) >= 2 and loc[0] == "body" and loc[1] in REQUIRED_FIELDS:
            # value_error comes from ContactInput.reject_blank.
            if error.get("type") in {"missing", "string_too_short", "value_error"} or error.get("input") is None:
                return ErrorMessage.REQUIRED_FIELD_MISSING
    return ErrorMessage.INVALID_INPUT


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = validation_message(exc)
    logger.warning(
        "Request validation failed",
        extra={"path": request.url.path, "method": request.method, "errors": exc.errors()},
    )
    return send_response(ResponseCode.VALIDATION_ERROR, message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error while processing request",
        extra={"path": request.url.path, "method": request.method},
    )
    return send_response(ResponseCode.DATABASE_ERROR, ErrorMessage.INTERNAL_SERVER_ERROR)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    This function performs one‑time setup tasks such as configuring
    logging, CORS and the API docs, and including the API router.  It
    returns a fully configured FastAPI instance ready to be served.

    Parameters
    ----------
    settings : Optional[Settings]
        Settings to build the app from.  Defaults to the process-wide
        settings read from the environment; tests pass their own to get
        an isolated database.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings

    # Initialise logging before anything else so that imports below can
    # safely log messages.
    setup_logging(settings.log_level, settings.log_dir or None)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        description="A RESTful API for managing contacts",
        docs_url=settings.docs_url,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(api_router, prefix=settings.api_prefix)

    @app.on_event("startup")
    async def startup_event() -> None:
        # A database that cannot be opened is fatal: let the error
        # propagate so the server refuses to start.
        conn = open_connection(settings)
        init_db(conn, unique_email=settings.unique_email)
        app.state.store = ContactStore(conn)
        logger.info(
            "Server is running on http://%s:%s",
            settings.host,
            settings.port,
            extra={"port": settings.port, "environment": settings.environment},
        )

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        store = getattr(app.state, "store", None)
        if store is not None:
            store.close()
            app.state.store = None
            logger.info("Database connection closed")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
