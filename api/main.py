from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from api.observability import RequestContextMiddleware, configure_logging
from api.ratelimit import limiter, rate_limit_exceeded_handler
from api.routes import router
from core.config import get_settings
from core.errors import RegionSiteError

logger = logging.getLogger(__name__)


def region_site_error_handler(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, RegionSiteError)
    level = logging.ERROR if exc.status_code >= 500 else logging.INFO
    logger.log(
        level,
        "request_failed",
        exc_info=exc if exc.status_code >= 500 else None,
        extra={"error_type": type(exc).__name__, "status_code": exc.status_code, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.status_code, content={"message": f"Error: {exc.message}"})


def request_validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    detail = ""
    if isinstance(exc, RequestValidationError) and exc.errors():
        err = exc.errors()[0]
        loc = ".".join(str(p) for p in err.get("loc", ()))
        detail = f" {loc}: {err.get('msg', 'invalid value')}"
    return JSONResponse(status_code=400, content={"message": f"Error: Invalid request.{detail}"})


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    # no interactive docs or schema in production
    docs_enabled = not settings.is_production
    app = FastAPI(
        title="Region Site API",
        version="1.0.0",
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(RegionSiteError, region_site_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.include_router(router)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware, header_name=settings.request_id_header_name or "X-Request-ID")

    logger.info("app_created", extra={"app_env": settings.app_env})
    return app


app = create_app()
