"""FastAPI application entry point."""

from __future__ import annotations

import asyncio

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from starlette.middleware.cors import CORSMiddleware

from app.api import discover, insights, locations
from app.core.config import Settings, get_settings
from app.core.logger import get_logger
from app.core.logging_config import configure_logging
from app.core.timeout_policy import get_timeout_policy

configure_logging()
logger = get_logger(__name__)

APP_TITLE = "WeatherWise Nearby API"
_DOCS_MODES = frozenset({"disabled", "public"})
_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
    "Cache-Control": "no-store",
}


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _docs_enabled(mode: str) -> bool:
    normalized = (mode or "").strip().lower()
    if normalized not in _DOCS_MODES:
        logger.warning("Invalid DOCS_MODE value, falling back to disabled: %s", mode)
        return False
    return normalized == "public"


def _add_cors(app_: FastAPI, settings: Settings) -> None:
    origins = _split_csv(settings.CORS_ALLOW_ORIGINS)
    if not origins:
        return

    allow_credentials = settings.CORS_ALLOW_CREDENTIALS
    if "*" in origins and allow_credentials:
        logger.warning("Wildcard CORS origin cannot be combined with credentials; disabling credentials.")
        allow_credentials = False

    app_.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=_split_csv(settings.CORS_ALLOW_METHODS) or ["GET"],
        allow_headers=_split_csv(settings.CORS_ALLOW_HEADERS) or ["Content-Type"],
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Assemble the API: routers, middleware and the fallback error handler."""
    settings = settings or get_settings()
    docs_enabled = _docs_enabled(settings.DOCS_MODE)
    request_timeout = get_timeout_policy(settings).request_timeout_seconds

    app_ = FastAPI(
        title=APP_TITLE,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    _add_cors(app_, settings)
    app_.include_router(discover.router)
    app_.include_router(insights.router)
    app_.include_router(locations.router)

    @app_.middleware("http")
    async def enforce_request_timeout(request: Request, call_next) -> Response:
        try:
            return await asyncio.wait_for(call_next(request), timeout=request_timeout)
        except asyncio.TimeoutError:
            logger.warning("Request timed out: %s %s timeout=%s", request.method, request.url.path, request_timeout)
            return JSONResponse(status_code=504, content={"detail": "Request timed out."})

    @app_.middleware("http")
    async def add_security_headers(request: Request, call_next) -> Response:
        response = await call_next(request)
        if settings.SECURITY_HEADERS_ENABLED:
            for name, value in _SECURITY_HEADERS.items():
                response.headers.setdefault(name, value)
        return response

    @app_.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
        detail = str(exc) if settings.EXPOSE_INTERNAL_ERRORS else "Internal server error."
        return JSONResponse(status_code=500, content={"detail": detail})

    @app_.get("/")
    def health_check() -> dict:
        """Liveness check."""
        return {"status": "ok", "message": f"{APP_TITLE} is running"}

    return app_


app = create_app()
