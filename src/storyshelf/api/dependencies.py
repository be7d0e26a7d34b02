"""FastAPI dependency injection providers."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storyshelf.infrastructure.database import get_session
from storyshelf.repositories.story_repo import StoryRepository

# Type alias for database session dependency
SessionDep = Annotated[AsyncSession, Depends(get_session)]


async def get_story_repository(
    session: SessionDep,
) -> AsyncGenerator[StoryRepository, None]:
    """Provide StoryRepository instance."""
    yield StoryRepository(session)


StoryRepoDep = Annotated[StoryRepository, Depends(get_story_repository)]
