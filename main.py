"""
Equipment Rental Storefront Backend
Inventory resolution, SEO page payloads and sitemap generation
"""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env", override=False)

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel

from exceptions import StorefrontError
from observability import get_logger, get_correlation_id, metrics_registry
from observability.middleware import ObservabilityMiddleware
from observability.sentry_config import init_sentry
from routes.inventory import router as inventory_router
from routes.pages import router as pages_router
from routes.sitemap import router as sitemap_router

logger = get_logger(__name__)

init_sentry()

# Create FastAPI app (must be defined before any @app.* decorators)
app = FastAPI(
    title="Equipment Rental Storefront Backend",
    description="Geo-aware inventory resolution and SEO URL dispatch",
    version="0.1.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(ObservabilityMiddleware)

app.include_router(inventory_router)
app.include_router(pages_router)
app.include_router(sitemap_router)


class HealthResponse(BaseModel):
    status: str
    version: str


# Health check endpoint
@app.get("/health", response_model=HealthResponse)
async def health_check():
    return {
        "status": "healthy",
        "version": "0.1.0"
    }


@app.get("/metrics")
async def metrics():
    """Prometheus scrape endpoint."""
    return Response(content=generate_latest(metrics_registry), media_type=CONTENT_TYPE_LATEST)


@app.exception_handler(StorefrontError)
async def storefront_error_handler(request: Request, exc: StorefrontError):
    if exc.status_code >= 500:
        logger.error(f"[API] {request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler for unhandled errors.

    Logs the full traceback server-side and returns a safe error message.
    """
    error_id = get_correlation_id() or f"ERR-{id(exc)}"
    logger.error(
        f"[ERROR {error_id}] Unhandled exception on {request.method} {request.url.path}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "error_id": error_id,
            "message": "An unexpected error occurred. Please try again.",
        }
    )


# Startup event
@app.on_event("startup")
async def startup_event():
    """Run on application startup"""
    logger.info("FastAPI application starting...")
    logger.info(f"Environment: {os.getenv('ENVIRONMENT', 'development')}")
    if not os.getenv("INVENTORY_API_KEY"):
        logger.warning("INVENTORY_API_KEY is not set; inventory endpoints will report 'Service not configured'")


# Shutdown event
@app.on_event("shutdown")
async def shutdown_event():
    """Run on application shutdown"""
    logger.info("FastAPI application shutting down...")
