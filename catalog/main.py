import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from catalog.core.config import APP_VERSION, settings
from catalog.core.logging import setup_logging

setup_logging(settings.log_level)

from catalog.api.middleware.cors import setup_cors
from catalog.api.middleware.request_id import RequestIdMiddleware
from catalog.api.middleware.security_headers import SecurityHeadersMiddleware
from catalog.api.routes import health
from catalog.api.routes.admin import (
    normalize as admin_normalize,
    pricing as admin_pricing,
    reports as admin_reports,
    variants as admin_variants,
)

logger = logging.getLogger(__name__)

try:
    settings.validate_secrets()
except ValueError as e:
    logger.critical("Secret validation failed: %s", e)
    raise SystemExit(f"FATAL: {e}") from e


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info(
        "Catalog tools %s started (currency=%s, max variants=%d)",
        APP_VERSION, settings.default_currency, settings.max_variant_combinations,
    )
    yield
    logger.info("Catalog tools shutting down")


app = FastAPI(
    title="Catalog Tools API",
    version=APP_VERSION,
    lifespan=lifespan,
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )

setup_cors(app)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestIdMiddleware)

# Public routes
app.include_router(health.router, prefix="/api")

# Admin routes
app.include_router(admin_variants.router, prefix="/api/admin")
app.include_router(admin_normalize.router, prefix="/api/admin")
app.include_router(admin_pricing.router, prefix="/api/admin")
app.include_router(admin_reports.router, prefix="/api/admin")
