"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from fitplan.auth.gateway import init_auth_gateway
from fitplan.catalog.router import router as catalog_router
from fitplan.config import get_settings
from fitplan.generation.client import close_generation_client, init_generation_client
from fitplan.health.router import router as health_router
from fitplan.middleware import setup_middleware
from fitplan.plans.router import advice_router, meals_router, workouts_router
from fitplan.progress.router import router as progress_router
from fitplan.redis_client import close_redis, init_redis
from fitplan.store import close_store, init_store
from fitplan.users.router import router as users_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    await init_store(settings)
    init_auth_gateway(settings)
    init_generation_client(settings)
    await init_redis(settings.redis_url)
    logger.info(
        "startup_complete",
        store_backend=settings.store_backend,
        auth_provider=settings.auth_provider,
        environment=settings.environment,
    )

    yield

    await close_redis()
    await close_generation_client()
    await close_store()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="FitPlan API",
        description="Backend API for FitPlan: workout and meal plans, progress tracking and achievements",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(users_router)
    app.include_router(progress_router)
    app.include_router(workouts_router)
    app.include_router(meals_router)
    app.include_router(advice_router)
    app.include_router(catalog_router)

    return app


app = create_app()
