# backend/sitefactory/main.py
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles

from .api import projects_router, proxies_router
from .config import PACKAGE_PATH, Settings, settings as default_settings
from .errors import RateLimitError, SiteFactoryError
from .services.rate_limit import CallerRateLimiter
from .stores import create_store
from .utils.logging import api_logger

ALLOWED_METHODS = "GET,POST,PATCH,DELETE,OPTIONS"
STATIC_PATH = PACKAGE_PATH / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    # Storage misconfiguration is fatal; let it abort startup
    app.state.store = create_store(settings)
    app.state.http_client = httpx.AsyncClient(timeout=settings.UPSTREAM_TIMEOUT_SECONDS)
    app.state.rate_limiter = (
        CallerRateLimiter(settings.RATE_LIMIT_REQUESTS, settings.RATE_LIMIT_WINDOW_SECONDS)
        if settings.RATE_LIMIT_ENABLED else None
    )
    api_logger.info("SiteFactory API started", extra={
        "storage_backend": app.state.store.backend_name,
        "port": settings.PORT
    })

    try:
        yield
    finally:
        await app.state.http_client.aclose()
        app.state.store.close()
        api_logger.info("SiteFactory API stopped")


def _cors_headers(allowed_origin: str) -> dict:
    return {
        "Access-Control-Allow-Origin": allowed_origin,
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": "Content-Type",
        "Vary": "Origin",
    }


def _error_response(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": message}, headers=headers)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Malformed JSON body"
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    app = FastAPI(title="SiteFactory API", lifespan=lifespan)
    app.state.settings = app_settings or default_settings
    cors_headers = _cors_headers(app.state.settings.CORS_ORIGIN or "*")

    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next):
        if request.method == "OPTIONS":
            response = Response(status_code=204)
        else:
            response = await call_next(request)
        response.headers.update(cors_headers)
        return response

    @app.exception_handler(SiteFactoryError)
    async def handle_app_error(request: Request, exc: SiteFactoryError) -> JSONResponse:
        headers = {"Retry-After": str(exc.retry_after)} if isinstance(exc, RateLimitError) else None
        return _error_response(exc.status_code, exc.message, headers)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _validation_message(exc)
        api_logger.info("Rejected invalid request", extra={
            "path": request.url.path,
            "reason": message
        })
        return _error_response(400, message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        api_logger.error("Unhandled error", extra={
            "path": request.url.path,
            "error": str(exc)
        }, exc_info=exc)
        # Runs outside the http middleware stack, so CORS headers are set here
        return _error_response(500, "Internal server error", cors_headers)

    @app.get("/health")
    async def health():
        return {"ok": True}

    app.include_router(projects_router)
    app.include_router(proxies_router)

    # Single-page UI; mounted last so API routes take precedence
    app.mount("/", StaticFiles(directory=str(STATIC_PATH), html=True), name="ui")

    return app


app = create_app()
