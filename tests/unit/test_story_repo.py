"""Tests for StoryRepository CRUD behaviour."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from storyshelf.domain.errors import NotFoundError, StoreError, ValidationError
from storyshelf.repositories.story_repo import StoryRepository


class TestCreateAndGet:
    """Tests for create_story and get_story."""

    async def test_create_then_get_returns_same_fields(self, test_session):
        repo = StoryRepository(test_session)

        created = await repo.create_story("Night Train", "The whistle blew twice.")
        fetched = await repo.get_story(created.id)

        assert created.id is not None
        assert fetched.title == "Night Train"
        assert fetched.full_text == "The whistle blew twice."

    async def test_ids_are_sequential(self, test_session):
        repo = StoryRepository(test_session)

        first = await repo.create_story("A", "a")
        second = await repo.create_story("B", "b")

        assert second.id == first.id + 1

    async def test_ids_of_deleted_rows_are_not_reused(self, test_session):
        repo = StoryRepository(test_session)

        first = await repo.create_story("A", "a")
        await repo.delete_story(first.id)
        second = await repo.create_story("B", "b")

        assert second.id > first.id

    @pytest.mark.parametrize(("title", "full_text"), [("", "x"), ("x", ""), (None, "x")])
    async def test_empty_fields_rejected_and_nothing_inserted(
        self, test_session, title, full_text
    ):
        repo = StoryRepository(test_session)

        with pytest.raises(ValidationError):
            await repo.create_story(title, full_text)

        assert await repo.count() == 0

    async def test_get_unknown_id_raises_not_found(self, test_session):
        repo = StoryRepository(test_session)

        with pytest.raises(NotFoundError, match="Story not found"):
            await repo.get_story(404)


class TestListStories:
    """Tests for list_stories projection."""

    async def test_list_omits_full_text(self, test_session):
        repo = StoryRepository(test_session)
        await repo.create_story("A", "secret body")

        summaries = await repo.list_stories()

        assert len(summaries) == 1
        assert summaries[0].title == "A"
        assert not hasattr(summaries[0], "full_text")

    async def test_list_empty_table(self, test_session):
        repo = StoryRepository(test_session)
        assert await repo.list_stories() == []


class TestUpdateAndDelete:
    """Tests for update_story and delete_story."""

    async def test_update_replaces_both_fields(self, test_session):
        repo = StoryRepository(test_session)
        story = await repo.create_story("Old", "old body")

        await repo.update_story(story.id, "New", "new body")
        fetched = await repo.get_story(story.id)

        assert fetched.title == "New"
        assert fetched.full_text == "new body"

    async def test_update_unknown_id_echoes_values_without_writing(self, test_session):
        repo = StoryRepository(test_session)
        existing = await repo.create_story("Keep", "keep body")

        result = await repo.update_story(999, "a", "b")

        assert (result.id, result.title, result.full_text) == (999, "a", "b")
        assert await repo.count() == 1
        unchanged = await repo.get_story(existing.id)
        assert unchanged.title == "Keep"

    async def test_update_rejects_empty_fields(self, test_session):
        repo = StoryRepository(test_session)
        story = await repo.create_story("T", "B")

        with pytest.raises(ValidationError):
            await repo.update_story(story.id, "", "B")

    async def test_delete_existing_then_get_raises(self, test_session):
        repo = StoryRepository(test_session)
        story = await repo.create_story("Gone", "soon")

        assert await repo.delete_story(story.id) is True

        with pytest.raises(NotFoundError):
            await repo.get_story(story.id)

    async def test_delete_unknown_id_reports_success(self, test_session):
        repo = StoryRepository(test_session)
        assert await repo.delete_story(12345) is True


class TestStoreFailures:
    """Driver errors surface as StoreError with the driver message."""

    def _broken_session(self):
        session = MagicMock()
        session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("disk I/O error"))
        )
        session.rollback = AsyncMock()
        return session

    async def test_list_wraps_driver_error(self):
        session = self._broken_session()
        repo = StoryRepository(session)

        with pytest.raises(StoreError, match="disk I/O error"):
            await repo.list_stories()

        session.rollback.assert_awaited_once()

    async def test_delete_wraps_driver_error(self):
        repo = StoryRepository(self._broken_session())

        with pytest.raises(StoreError):
            await repo.delete_story(1)

    async def test_overflowing_id_wraps_as_store_error(self):
        session = MagicMock()
        session.execute = AsyncMock(
            side_effect=OverflowError("Python int too large to convert to SQLite INTEGER")
        )
        session.rollback = AsyncMock()
        repo = StoryRepository(session)

        with pytest.raises(StoreError, match="too large"):
            await repo.count()

        session.rollback.assert_awaited_once()


class TestOutOfRangeIds:
    """Ids beyond SQLite's 64-bit integers behave like unknown ids."""

    HUGE_ID = 99999999999999999999

    async def test_get_raises_not_found(self, test_session):
        repo = StoryRepository(test_session)

        with pytest.raises(NotFoundError):
            await repo.get_story(self.HUGE_ID)

    async def test_get_negative_raises_not_found(self, test_session):
        with pytest.raises(NotFoundError):
            await StoryRepository(test_session).get_story(-self.HUGE_ID)

    async def test_update_echoes_values(self, test_session):
        repo = StoryRepository(test_session)
        await repo.create_story("Keep", "keep body")

        result = await repo.update_story(self.HUGE_ID, "a", "b")

        assert (result.id, result.title, result.full_text) == (self.HUGE_ID, "a", "b")
        assert await repo.count() == 1

    async def test_update_still_validates_fields(self, test_session):
        with pytest.raises(ValidationError):
            await StoryRepository(test_session).update_story(self.HUGE_ID, "", "b")

    async def test_delete_reports_success(self, test_session):
        assert await StoryRepository(test_session).delete_story(self.HUGE_ID) is True

    async def test_largest_sqlite_id_is_still_queried(self, test_session):
        repo = StoryRepository(test_session)

        with pytest.raises(NotFoundError):
            await repo.get_story(2**63 - 1)
        assert await repo.delete_story(2**63 - 1) is True
