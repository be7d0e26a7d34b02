"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from storyshelf.api.dependencies import SessionDep
from storyshelf.api.errors import register_error_handlers
from storyshelf.api.rest.router import router as api_router
from storyshelf.api.web.views import router as web_router
from storyshelf.config import get_settings

# Configure logging
settings = get_settings()
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown.

    The schema and demo rows are in place before uvicorn opens the socket.
    """
    from storyshelf.infrastructure.database import async_session_factory, engine, init_db
    from storyshelf.services.seeder import seed_demo_stories

    logger.info("Starting storyshelf application...")
    logger.info(f"Environment: {settings.environment}")

    await init_db()
    async with async_session_factory() as session:
        await seed_demo_stories(session)

    yield

    await engine.dispose()
    logger.info("Shutting down storyshelf application...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    docs_kwargs = {}
    if settings.is_production:
        docs_kwargs = {"docs_url": None, "redoc_url": None, "openapi_url": None}

    app = FastAPI(
        title="storyshelf",
        description="A personal story library",
        version="0.1.0",
        lifespan=lifespan,
        **docs_kwargs,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    # Mount static files
    app.mount("/static", StaticFiles(directory=settings.static_dir), name="static")

    # Include routers
    app.include_router(api_router)
    app.include_router(web_router)

    @app.get("/health")
    async def health_check(session: SessionDep) -> JSONResponse:
        """Lightweight health check with DB connectivity test."""
        try:
            await session.execute(text("SELECT 1"))
            return JSONResponse({"status": "healthy", "database": "connected"})
        except SQLAlchemyError:
            return JSONResponse(
                {"status": "unhealthy", "database": "disconnected"},
                status_code=503,
            )

    return app


# Create app instance
app = create_app()
