"""
Mini CRM API - Main Application.

FastAPI application with CORS enabled for frontend communication.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import __version__
from api.errors import register_error_handlers
from api.routers import customers, dashboard, products, sales
from config.settings import configure_logging, get_settings

settings = get_settings()
configure_logging(settings.log_level)

logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title="Mini CRM API",
    description="REST API for customers, products/services and sales",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Configure CORS from CRM_CORS_ORIGINS (defaults to all origins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


@app.get("/health", tags=["Health"])
def health_check():
    """
    Health check endpoint.

    Returns the API status, version and configured storage backend.
    """
    return {
        "status": "healthy",
        "version": __version__,
        "service": "mini-crm-api",
        "storage_backend": settings.storage_backend,
    }


@app.get("/", tags=["Root"])
def root():
    """
    Root endpoint with API information.
    """
    return {
        "message": "Mini CRM API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }


app.include_router(customers.router, prefix="/api", tags=["Customers"])
app.include_router(products.router, prefix="/api", tags=["Products"])
app.include_router(sales.router, prefix="/api", tags=["Sales"])
app.include_router(dashboard.router, prefix="/api", tags=["Dashboard"])

logger.info("Mini CRM API ready", extra={"version": __version__, "storage_backend": settings.storage_backend})


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host="0.0.0.0", port=5000)
