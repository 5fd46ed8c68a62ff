"""Sweet Shop API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SweetShopError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Bootstrap admin created in lifespan only when both credentials are configured
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sweetshop.api.error_handlers import register_error_handlers
from sweetshop.api.routes import auth, health, sweets
from sweetshop.config import Settings, get_settings
from sweetshop.infrastructure.database import DatabaseSessionManager, init_db
from sweetshop.infrastructure.observability import setup_logging
from sweetshop.services.auth_service import AuthService
from sweetshop.services.repositories import SqlUserRepository

logger = logging.getLogger(__name__)


async def bootstrap_admin(
    manager: DatabaseSessionManager, settings: Settings,
) -> None:
    """Ensure the configured admin account exists."""
    if not (
        settings.bootstrap_admin_username and settings.bootstrap_admin_password
    ):
        return
    async with manager.session() as db:
        service = AuthService(SqlUserRepository(db), settings.jwt_secret_key)
        await service.ensure_admin(
            settings.bootstrap_admin_username,
            settings.bootstrap_admin_password,
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await bootstrap_admin(manager, settings)
    logger.info("Sweet Shop API started")
    yield
    await manager.dispose()
    logger.info("Sweet Shop API shutting down")


app = FastAPI(
    title="Sweet Shop API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(sweets.router)

register_error_handlers(app)
