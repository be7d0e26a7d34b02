"""Story repository for database operations."""

import logging

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storyshelf.domain.errors import NotFoundError, StoreError
from storyshelf.domain.story import Story, StorySummary
from storyshelf.infrastructure.models import StoryModel

logger = logging.getLogger(__name__)

STORY_NOT_FOUND_MESSAGE = "Story not found"

# SQLite INTEGER is a signed 64-bit value
MAX_STORY_ID = 2**63 - 1
MIN_STORY_ID = -(2**63)

# Errors raised by the driver that SQLAlchemy does not wrap
STORE_ERRORS = (SQLAlchemyError, OverflowError)


class StoryRepository:
    """Repository for Story CRUD operations.

    Every public method is one atomic unit of work: writes commit before
    returning, and any driver failure is rolled back and re-raised as
    ``StoreError`` carrying the driver's message.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    @staticmethod
    def _storable_id(story_id: int) -> bool:
        """Ids outside SQLite's integer range cannot match any row."""
        return MIN_STORY_ID <= story_id <= MAX_STORY_ID

    async def _fail(self, exc: Exception) -> StoreError:
        await self.session.rollback()
        logger.error(f"Story store failure: {exc}")
        return StoreError(str(exc))

    async def create_story(self, title: str, full_text: str) -> Story:
        """Insert a new story and return it with its assigned id."""
        Story.validate_fields(title, full_text)
        model = StoryModel(title=title, full_text=full_text)
        try:
            self.session.add(model)
            await self.session.flush()
            await self.session.commit()
        except STORE_ERRORS as e:
            raise await self._fail(e) from e

        logger.info(f"Created story {model.id}: {title!r}")
        return Story(id=model.id, title=title, full_text=full_text)

    async def get_story(self, story_id: int) -> Story:
        """Get a full story by its ID.

        Raises:
            NotFoundError: if no row has this id
        """
        if not self._storable_id(story_id):
            raise NotFoundError(STORY_NOT_FOUND_MESSAGE)

        stmt = select(StoryModel).where(StoryModel.id == story_id)
        try:
            result = await self.session.execute(stmt)
            model = result.scalar_one_or_none()
        except STORE_ERRORS as e:
            raise await self._fail(e) from e

        if model is None:
            raise NotFoundError(STORY_NOT_FOUND_MESSAGE)
        return Story(id=model.id, title=model.title, full_text=model.full_text)

    async def list_stories(self) -> list[StorySummary]:
        """List every story as ``{id, title}``; full text is withheld."""
        stmt = select(StoryModel.id, StoryModel.title).order_by(StoryModel.id)
        try:
            result = await self.session.execute(stmt)
            rows = result.all()
        except STORE_ERRORS as e:
            raise await self._fail(e) from e

        return [StorySummary(id=row.id, title=row.title) for row in rows]

    async def update_story(self, story_id: int, title: str, full_text: str) -> Story:
        """Replace title and body of a story.

        An unknown id matches no row and is not an error: the requested
        values are echoed back either way.
        """
        Story.validate_fields(title, full_text)
        if not self._storable_id(story_id):
            logger.debug(f"Update matched no story with id {story_id}")
            return Story(id=story_id, title=title, full_text=full_text)

        stmt = (
            update(StoryModel)
            .where(StoryModel.id == story_id)
            .values(title=title, full_text=full_text)
        )
        try:
            result = await self.session.execute(stmt)
            await self.session.commit()
        except STORE_ERRORS as e:
            raise await self._fail(e) from e

        if result.rowcount == 0:
            logger.debug(f"Update matched no story with id {story_id}")
        return Story(id=story_id, title=title, full_text=full_text)

    async def delete_story(self, story_id: int) -> bool:
        """Delete a story. Idempotent: unknown ids still report success."""
        if not self._storable_id(story_id):
            return True

        stmt = delete(StoryModel).where(StoryModel.id == story_id)
        try:
            await self.session.execute(stmt)
            await self.session.commit()
        except STORE_ERRORS as e:
            raise await self._fail(e) from e

        logger.info(f"Deleted story {story_id}")
        return True

    async def count(self) -> int:
        """Get total story count."""
        stmt = select(func.count(StoryModel.id))
        try:
            result = await self.session.execute(stmt)
        except STORE_ERRORS as e:
            raise await self._fail(e) from e
        return result.scalar() or 0
