from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.sitt.api.middlewares import setup_middlewares
from src.sitt.api.v1.router import api_router
from src.sitt.core.config import get_settings
from src.sitt.core.db import dispose_engine, get_session_factory, run_migrations_async
from src.sitt.core.exceptions import setup_exception_handlers
from src.sitt.core.health import setup_health_endpoint, setup_metrics
from src.sitt.core.logging import get_logger, setup_logging
from src.sitt.core.shutdown import request_tracker
from src.sitt.repositories import UserRepository
from src.sitt.services import reset_tracking_services
from src.sitt.services.bootstrap import ensure_bootstrap_admin

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info("Starting application", app_name=settings.app_name, env=settings.app_env)

    if settings.run_migrations_on_startup:
        await run_migrations_async()

    if settings.bootstrap_admin_api_key:
        await ensure_bootstrap_admin(
            UserRepository(get_session_factory()),
            settings.bootstrap_admin_name,
            settings.bootstrap_admin_api_key,
        )

    yield

    await request_tracker.start_shutdown()
    await request_tracker.wait_for_drain(timeout=settings.shutdown_grace_period)

    reset_tracking_services()
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "projects", "description": "Projects and their aggregate tracked time"},
    {"name": "timetrack", "description": "Starting, stopping and editing time tracks"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Time tracking API scoped to the owner of an API key",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    setup_exception_handlers(app)
    setup_middlewares(app, settings)

    app.include_router(api_router)

    setup_metrics(app)
    setup_health_endpoint(app)

    return app


app = create_app()
