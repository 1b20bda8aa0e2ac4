"""FastAPI application factory."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.errors import (
    APIError,
    api_error_handler,
    general_exception_handler,
    http_exception_handler,
    validation_error_handler,
)
from .api.middleware import LoggingMiddleware, RequestIDMiddleware
from .api.v1.router import create_v1_router
from .core.config import get_settings
from .core.logging import setup_logging
from .core.security import enforce_api_key
from .lifecycles import lifespan

_LINKS = (
    ("docs", "docs"),
    ("health", "v1/health"),
    ("version", "v1/version"),
    ("recover", "v1/recover"),
)


def _build_links(base_url: str) -> Dict[str, str]:
    if not base_url.endswith("/"):
        base_url = f"{base_url}/"
    return {name: f"{base_url}{path}" for name, path in _LINKS}


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_json)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
        dependencies=[Depends(enforce_api_key)],
    )

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    @app.get("/", include_in_schema=False)
    async def root(request: Request) -> Dict[str, Any]:
        """Describe the service and link to its endpoints."""

        return {
            "status": "available",
            "service": settings.app_name,
            "version": settings.app_version,
            "links": _build_links(str(request.base_url)),
        }

    app.include_router(create_v1_router())
    return app
