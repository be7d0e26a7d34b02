"""Async HTTP client for the story API."""

import logging
from typing import Any

import aiohttp
from aiohttp import ClientTimeout

from storyshelf.config import get_settings
from storyshelf.domain.story import Story

logger = logging.getLogger(__name__)
settings = get_settings()


class StoryApiError(Exception):
    """The story API answered with an error, or could not be reached."""

    def __init__(self, status: int | None, message: str) -> None:
        super().__init__(f"HTTP {status}: {message}" if status else message)
        self.status = status
        self.message = message


class StoryApiClient:
    """Async client for the ``/api/stories`` endpoints.

    No retries: every call is a single request and failures surface as
    ``StoryApiError``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout_seconds: int | None = None,
    ) -> None:
        """Initialize story API client.

        Args:
            base_url: Server base URL (defaults to config)
            timeout_seconds: Request timeout in seconds (defaults to config)
        """
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = ClientTimeout(
            total=timeout_seconds or settings.client_timeout_seconds
        )
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def close(self) -> None:
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "StoryApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        """Send one request and decode the JSON body.

        Raises:
            StoryApiError: on non-2xx status, timeout or connection failure
        """
        url = f"{self.base_url}/api/stories{path}"
        session = await self._get_session()

        try:
            async with session.request(method, url, json=payload) as response:
                try:
                    data = await response.json(content_type=None)
                except ValueError as e:
                    # Proxies and crashed servers answer with HTML or plain text
                    if response.status < 400:
                        logger.error(f"Non-JSON body from {method} {url}")
                        raise StoryApiError(
                            response.status, "Response body is not valid JSON"
                        ) from e
                    data = None

                if response.status >= 400:
                    message = "Unknown error"
                    if isinstance(data, dict):
                        message = data.get("error", message)
                    logger.error(f"HTTP {response.status} for {method} {url}: {message}")
                    raise StoryApiError(response.status, message)
                return data
        except TimeoutError as e:
            logger.warning(f"Timeout on {method} {url}")
            raise StoryApiError(None, f"Timeout calling {url}") from e
        except aiohttp.ClientError as e:
            logger.warning(f"Client error on {method} {url}: {e}")
            raise StoryApiError(None, str(e)) from e

    async def list_stories(self) -> list[dict[str, Any]]:
        """Fetch all story summaries as raw ``{id, title}`` dicts."""
        data = await self._request("GET", "")
        logger.info(f"Fetched {len(data)} stories")
        return data

    async def get_story(self, story_id: int) -> Story:
        """Fetch one story including its full text."""
        data = await self._request("GET", f"/{story_id}")
        return Story.from_api(data)

    async def create_story(self, title: str, full_text: str) -> Story:
        """Create a story and return it with its new id."""
        data = await self._request("POST", "", {"title": title, "full_text": full_text})
        return Story.from_api(data)

    async def update_story(self, story_id: int, title: str, full_text: str) -> Story:
        """Replace a story's title and text."""
        data = await self._request(
            "PUT", f"/{story_id}", {"title": title, "full_text": full_text}
        )
        return Story.from_api(data)

    async def delete_story(self, story_id: int) -> bool:
        """Delete a story; the server reports success even for unknown ids."""
        data = await self._request("DELETE", f"/{story_id}")
        return bool(data.get("success"))
