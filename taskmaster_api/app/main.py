"""
Main entrypoint for the TaskMaster Pro API.

This module assembles the FastAPI application: it sets up logging,
creates the in-memory store, chooses the credential resolvers according
to the known defects, registers the error handlers and includes the
routers.  ``create_app`` builds and configures the app, which is then
instantiated at module import time as ``app`` so it can be served
with::

    uvicorn taskmaster_api.app.main:app --port 3001

Every error leaves the API as ``{"error": "<message>"}``.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.endpoints import health
from .api.router import router as api_router
from .core.config import Settings, settings
from .core.defects import (
    DESCRIPTIONS,
    KNOWN_DEFECT_AUTH_BYPASS,
    KNOWN_DEFECT_UNAUTHENTICATED_TASKS,
    active_defects,
    is_active,
)
from .core.errors import InternalError, TaskMasterError
from .core.logging_config import setup_logging
from .core.security import build_resolver
from .core.store import InMemoryStore, create_store
from .services.task_service import TITLE_REQUIRED
from .services.user_service import CREDENTIALS_REQUIRED


logger = logging.getLogger(__name__)

# Message for a body that fails validation, keyed by (method, path).  Other
# operations answer with INVALID_BODY.
VALIDATION_MESSAGES = {
    ("POST", "/api/auth/login"): CREDENTIALS_REQUIRED,
    ("POST", "/api/auth/register"): CREDENTIALS_REQUIRED,
    ("POST", "/api/tasks"): TITLE_REQUIRED,
}
INVALID_BODY = "Invalid request body"


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def handle_taskmaster_error(request: Request, exc: TaskMasterError) -> JSONResponse:
    return _error_response(exc.status_code, exc.message)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Bodies that are not JSON or carry wrongly typed fields.
    logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    message = VALIDATION_MESSAGES.get((request.method, request.url.path.rstrip("/")), INVALID_BODY)
    return _error_response(status.HTTP_400_BAD_REQUEST, message)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Raised by routing itself; unknown paths and unsupported methods look alike to clients.
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return _error_response(status.HTTP_404_NOT_FOUND, "Endpoint not found")
    return _error_response(exc.status_code, str(exc.detail))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, InternalError.default_message)


def create_app(app_settings: Optional[Settings] = None, store: Optional[InMemoryStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use; defaults to the module-level ``settings`` read
        from the environment.
    store : Optional[InMemoryStore]
        Store to serve; defaults to a fresh one, seeded with the demo
        data unless ``seed_demo_data`` is off.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or settings
    setup_logging(app_settings)

    app = FastAPI(title=app_settings.project_name, version=app_settings.api_version, debug=app_settings.debug)

    app.state.settings = app_settings
    app.state.store = store if store is not None else create_store(
        seed=app_settings.seed_demo_data,
        iterations=app_settings.password_hash_iterations,
    )
    app.state.profile_resolver = build_resolver(is_active(KNOWN_DEFECT_AUTH_BYPASS, app_settings), app_settings)
    app.state.task_resolver = build_resolver(
        is_active(KNOWN_DEFECT_UNAUTHENTICATED_TASKS, app_settings),
        app_settings,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, tags=["health"])
    app.include_router(api_router, prefix="/api")

    app.add_exception_handler(TaskMasterError, handle_taskmaster_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)

    for defect in active_defects(app_settings):
        logger.warning("Known defect active (for hotfix practice): %s - %s", defect, DESCRIPTIONS[defect])

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
