"""Stateful library view driven by the story API."""

import logging
from collections.abc import Callable
from dataclasses import replace

from storyshelf.client.api_client import StoryApiClient, StoryApiError
from storyshelf.client.projection import StoryCard, ViewState, decorate, render, toggle_read
from storyshelf.domain.story import Story, StorySummary

logger = logging.getLogger(__name__)

CREATE_FAILED_MESSAGE = "Failed to save story. Please try again."


class LibrarySession:
    """One page session of the story library.

    Holds the fetched summaries and the selected filters, and re-renders the
    card list after every state change. Read/unread state stays in memory and
    is lost on ``refresh``.
    """

    def __init__(
        self,
        client: StoryApiClient,
        alert: Callable[[str], None] | None = None,
    ) -> None:
        self.client = client
        self.alert = alert or (lambda message: logger.warning(message))
        self.stories: list[StorySummary] = []
        self.state = ViewState()
        self.cards: list[StoryCard] = []

    def rerender(self) -> list[StoryCard]:
        self.cards = render(self.stories, self.state)
        return self.cards

    async def refresh(self) -> list[StoryCard]:
        """Re-fetch all summaries, discarding demo fields and read-state.

        Raises:
            StoryApiError: if the list cannot be fetched
        """
        rows = await self.client.list_stories()
        self.stories = decorate(rows)
        return self.rerender()

    def select_genre(self, genre: str) -> list[StoryCard]:
        self.state = replace(self.state, genre=genre)
        return self.rerender()

    def select_sort(self, sort: str) -> list[StoryCard]:
        self.state = replace(self.state, sort=sort)
        return self.rerender()

    def select_status(self, status: str) -> list[StoryCard]:
        self.state = replace(self.state, status=status)
        return self.rerender()

    def toggle_read(self, story_id: int) -> list[StoryCard]:
        """Flip read-state locally; the server never sees it."""
        if toggle_read(self.stories, story_id) is None:
            logger.debug(f"No story {story_id} in current list")
        return self.rerender()

    async def open_story(self, story_id: int) -> Story:
        """Fetch the full text for the detail view.

        Raises:
            StoryApiError: if the story is missing or the call fails
        """
        return await self.client.get_story(story_id)

    async def create_story(self, title: str, full_text: str) -> bool:
        """Submit a new story and reload the whole list on success.

        Empty input is ignored without calling the API. A failed save is
        reported through ``alert`` rather than raised.
        """
        if not title or not full_text:
            return False

        try:
            created = await self.client.create_story(title, full_text)
        except StoryApiError as e:
            logger.error(f"Create story failed: {e}")
            self.alert(CREATE_FAILED_MESSAGE)
            return False

        logger.info(f"Created story {created.id}, reloading list")
        await self.refresh()
        return True
