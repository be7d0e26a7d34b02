"""SQLAlchemy async database setup."""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from storyshelf.config import get_settings
from storyshelf.infrastructure.models import Base

logger = logging.getLogger(__name__)
settings = get_settings()

# One shared engine for the process, backed by a single SQLite file
engine = create_async_engine(
    settings.database_url,
    echo=not settings.is_production,
)

# Session factory
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def init_db(db_engine: AsyncEngine | None = None) -> None:
    """Create the stories table if it does not exist yet."""
    if db_engine is None:
        db_engine = engine
        settings.database_path.parent.mkdir(parents=True, exist_ok=True)
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"Database ready at {db_engine.url.database}")


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for FastAPI to get database session."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
