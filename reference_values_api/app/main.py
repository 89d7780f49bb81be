"""
Main entrypoint for the Reference Values API.

This module assembles the FastAPI application: it sets up logging,
creates the reference value store, installs the token middleware and
the JSON error handlers, and includes the versioned router.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn reference_values_api.app.main:app

The backing file is loaded when the application starts up, not at
import time.  A missing or malformed file aborts startup.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .core.security import AuthMiddleware, TokenStore
from .services.reference_value_store import ReferenceValueStore

logger = logging.getLogger(__name__)

INVALID_BODY_MESSAGE = "Invalid request body."


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as ``{"message": ...}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject malformed request bodies with HTTP 400."""
    logger.info("Invalid body for %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": INVALID_BODY_MESSAGE},
    )


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the module level ``settings``.  Tests
        pass their own to point the store at a temporary file.

    Returns
    -------
    FastAPI
        A configured application.  Its store is available as
        ``app.state.store`` and is loaded when the app starts.
    """
    cfg = app_settings or default_settings
    setup_logging(cfg.log_level, cfg.log_file or None)

    store = ReferenceValueStore(cfg.data_file)
    token_store = TokenStore(cfg.token_list())
    if not len(token_store):
        logger.warning("API_TOKENS is empty; every request will be rejected")

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Failures propagate and stop the server from starting.
        store.load()
        yield

    app = FastAPI(title=cfg.project_name, version=cfg.api_version, lifespan=lifespan)
    app.state.store = store
    app.state.token_store = token_store

    app.add_middleware(AuthMiddleware, token_store=token_store)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(v1_router)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
