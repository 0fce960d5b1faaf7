"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from wealthdash.config.settings import get_settings
from wealthdash.config.logging_config import setup_logging
from wealthdash.repositories.sqlalchemy.database import init_db
from wealthdash.providers.yahoo_client import get_yahoo_client
from wealthdash.api.routers import finance_router, prices_router, providers_router
from wealthdash.core.exceptions import AppError

_STATUS_BY_CODE = {
    "SYMBOL_NOT_FOUND": 404,
    "PROVIDER_UNAVAILABLE": 500,
    "MALFORMED_UPSTREAM_RESPONSE": 500,
    "CACHE_UNAVAILABLE": 503,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    get_yahoo_client()
    yield
    # Shutdown (nothing to clean up)


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Cached multi-provider asset price resolution for a wealth dashboard",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(finance_router)
app.include_router(prices_router)
app.include_router(providers_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    status_code = _STATUS_BY_CODE.get(exc.code, 400)
    content = {"error": exc.code, "message": exc.message}
    if status_code >= 500:
        content["details"] = "Check server logs for more information"
    return JSONResponse(status_code=status_code, content=content)


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
