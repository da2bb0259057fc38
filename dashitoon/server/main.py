"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request logging), registers exception handlers and includes all API routers.
It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dashitoon.core.database import init_db
from dashitoon.core.logging_config import get_logger, setup_logging
from dashitoon.core.monitoring import initialize_logfire

from .api.v1 import (
    admin,
    chapters,
    genres,
    health,
    images,
    kana,
    reviews,
    series,
    subscriptions,
    tiers,
    volumes,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestLoggingMiddleware
from .services.deps import get_moderation_service

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates missing tables on startup. Schema changes are applied with Alembic.
    """
    # Startup
    try:
        logger.info("Starting up DashiToon Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    # Shutdown
    logger.info("Shutting down DashiToon Server...")
    if get_moderation_service.cache_info().currsize:
        await get_moderation_service().aclose()
        get_moderation_service.cache_clear()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    DashiToon Server API

    Backend of the DashiToon web-serial platform: series, volumes and chapters for
    authors, reviews and DashiFan subscriptions for readers, the Kana wallet and the
    administrator rates panel.
    """,
    version=constant.API_VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(RequestLoggingMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)

app.include_router(health.router, tags=["health"])
app.include_router(series.router, prefix=f"{constant.API_V1_STR}/series", tags=["series"])
app.include_router(volumes.router, prefix=f"{constant.API_V1_STR}/series/{{series_id}}/volumes", tags=["volumes"])
app.include_router(
    chapters.router,
    prefix=f"{constant.API_V1_STR}/series/{{series_id}}/volumes/{{volume_id}}/chapters",
    tags=["chapters"],
)
app.include_router(tiers.router, prefix=f"{constant.API_V1_STR}/series/{{series_id}}/tiers", tags=["tiers"])
app.include_router(reviews.router, prefix=constant.API_V1_STR, tags=["reviews"])
app.include_router(genres.router, prefix=f"{constant.API_V1_STR}/genres", tags=["genres"])
app.include_router(images.router, prefix=f"{constant.API_V1_STR}/images", tags=["images"])
app.include_router(subscriptions.router, prefix=f"{constant.API_V1_STR}/subscriptions", tags=["subscriptions"])
app.include_router(kana.router, prefix=f"{constant.API_V1_STR}/kana", tags=["kana"])
app.include_router(admin.router, prefix=f"{constant.API_V1_STR}/admin", tags=["admin"])
