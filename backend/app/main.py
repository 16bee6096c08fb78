"""ShirtShop API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ShirtShopError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database pool initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Uploads served as static files under the same prefix MediaStorage writes
      into records; the directory is created before mounting so an unknown name
      is a 404 even before the first upload
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.api.error_handlers import register_error_handlers
from app.api.routes import auth, cart, health, posts, profile
from app.config import get_settings
from app.infrastructure.database import close_db, init_db
from app.infrastructure.observability import log_requests, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("ShirtShop API started")
    yield
    await close_db()
    logger.info("ShirtShop API shutting down")


app = FastAPI(
    title="ShirtShop API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)
app.middleware("http")(log_requests)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(posts.router)
app.include_router(cart.router)

upload_dir = Path(settings.upload_dir)
upload_dir.mkdir(parents=True, exist_ok=True)
app.mount(
    settings.upload_url_prefix,
    StaticFiles(directory=upload_dir),
    name="uploads",
)
