"""
Main entrypoint for the Club Directory API.

This module assembles the FastAPI application, sets up logging,
attaches the member store and includes the versioned router.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``::

    uvicorn club_directory_api.app.main:app --reload

The router is mounted twice: under ``/api/v1`` and at the root, so
that existing clients calling ``/members`` directly keep working.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.errors import MemberError
from .core.logging_config import setup_logging
from .services.member_store import MemberStore


logger = logging.getLogger(__name__)


def _format_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


async def member_error_handler(request: Request, exc: MemberError) -> PlainTextResponse:
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> PlainTextResponse:
    message = _format_validation_error(exc)
    logger.info("%s %s rejected: %s", request.method, request.url.path, message)
    return PlainTextResponse(message, status_code=400)


def create_app(store: Optional[MemberStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[MemberStore]
        Store to serve.  When omitted, a store is seeded from
        ``settings.seed_path``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    if store is None:
        store = MemberStore.from_json_file(settings.seed_path)
    app.state.member_store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(MemberError, member_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(v1_router, prefix="/api/v1")
    # Unprefixed mount for clients of the original service.
    app.include_router(v1_router)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
