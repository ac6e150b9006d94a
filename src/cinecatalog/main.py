"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cinecatalog.admin.app import setup_admin
from cinecatalog.api.errors import register_exception_handlers
from cinecatalog.api.routes import auth, bulk, directors, genres, health, media, media_types, producers
from cinecatalog.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="CineCatalog API",
    description="Movie and series catalog with genres, directors, producers and types",
    version="1.0.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(health.router)
app.include_router(genres.router, prefix=settings.api_prefix, tags=["genres"])
app.include_router(directors.router, prefix=settings.api_prefix, tags=["directors"])
app.include_router(producers.router, prefix=settings.api_prefix, tags=["producers"])
app.include_router(media_types.router, prefix=settings.api_prefix, tags=["types"])
app.include_router(media.router, prefix=settings.api_prefix, tags=["media"])
app.include_router(bulk.router, prefix=settings.api_prefix, tags=["bulk"])
app.include_router(auth.router, prefix=settings.api_prefix, tags=["auth"])

# Back-office at /admin
setup_admin(app)

logger.info(f"CineCatalog API ready ({settings.environment}), routes under {settings.api_prefix}")
