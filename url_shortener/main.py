"""URL Shortener Service - Main FastAPI Application.

A small URL shortening service with:
- Create short URLs (idempotent per long URL)
- Redirect short URLs to the original URLs
- List every stored URL
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.database import Database
from .api.responses import server_error_response
from .api.routes import health_router, urls_router
from .services.url_service import UrlService
from .utils.shortener import CodeGenerator

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    # Startup
    logger.info(f"Starting {settings.app_title}...")
    db = Database(settings.db_path, settings.url_collection_name)
    db.init_db()
    app.state.url_service = UrlService(
        db,
        generator=CodeGenerator(db, settings.short_url_length),
        max_attempts=settings.max_generation_attempts,
    )
    logger.info("Database initialized")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_title}...")
    db.close()


# Create FastAPI application
app = FastAPI(
    title=settings.app_title,
    description=settings.app_description,
    version=settings.app_version,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """General exception handler."""
    logger.error(f"Unhandled Exception on {request.method} {request.url.path}: {exc}")
    return server_error_response(exc)


# Include routers
app.include_router(health_router)
app.include_router(urls_router)
