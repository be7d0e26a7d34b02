"""HTMX-powered web views for the story library.

Read-state never reaches the database: the page carries the ids of stories
marked read in the ``read`` query parameter as a JSON array.
"""

import json
from urllib.parse import urlencode

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from storyshelf.api.dependencies import StoryRepoDep
from storyshelf.client.projection import (
    ALL_GENRES,
    GENRES,
    SORT_POPULAR,
    STATUS_ALL,
    ViewState,
    decorate,
    render,
    toggle_read,
)
from storyshelf.config import PACKAGE_DIR
from storyshelf.domain.errors import NotFoundError

router = APIRouter(tags=["web"])

# Templates configuration
templates = Jinja2Templates(directory=str(PACKAGE_DIR / "templates"))

SORT_OPTIONS = [("popular", "Most Popular"), ("recent", "Most Recent"), ("liked", "Most Liked")]
STATUS_OPTIONS = [("all", "All"), ("read", "Read"), ("unread", "Unread")]


def _parse_id_list(s: str | None) -> list[int]:
    """Parse a JSON-encoded list of story ids from query parameter."""
    if not s:
        return []
    try:
        result = json.loads(s)
        if not isinstance(result, list):
            return []
        return [
            item for item in result
            if isinstance(item, int) and not isinstance(item, bool)
        ]
    except json.JSONDecodeError:
        return []


async def build_library_context(
    story_repo: StoryRepoDep,
    genre: str,
    sort: str,
    status: str,
    read: str | None,
    toggle: int | None = None,
) -> dict:
    """Fetch, decorate, apply read-state and project stories for a template."""
    stories = decorate(await story_repo.list_stories())

    read_ids = set(_parse_id_list(read))
    for story in stories:
        story.read = story.id in read_ids
    if toggle is not None:
        toggle_read(stories, toggle)

    state = ViewState(genre=genre, sort=sort, status=status)
    read_json = json.dumps([s.id for s in stories if s.read])

    def query(**overrides: object) -> str:
        params = {"genre": genre, "sort": sort, "status": status, "read": read_json}
        params.update(overrides)
        return urlencode({k: v for k, v in params.items() if v is not None})

    return {
        "cards": render(stories, state),
        "state": state,
        "read_json": read_json,
        "genres": [ALL_GENRES, *GENRES],
        "sort_options": SORT_OPTIONS,
        "status_options": STATUS_OPTIONS,
        "query": query,
    }


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    story_repo: StoryRepoDep,
    genre: str = ALL_GENRES,
    sort: str = SORT_POPULAR,
    status: str = STATUS_ALL,
    read: str | None = None,
) -> HTMLResponse:
    """Render the library page with filter controls and story cards."""
    context = await build_library_context(story_repo, genre, sort, status, read)
    return templates.TemplateResponse(request=request, name="index.html", context=context)


@router.get("/stories/cards", response_class=HTMLResponse)
async def story_cards(
    request: Request,
    story_repo: StoryRepoDep,
    genre: str = ALL_GENRES,
    sort: str = SORT_POPULAR,
    status: str = STATUS_ALL,
    read: str | None = None,
    toggle: int | None = None,
) -> HTMLResponse:
    """HTMX endpoint for filter changes and read toggles - returns card list partial."""
    context = await build_library_context(story_repo, genre, sort, status, read, toggle)
    return templates.TemplateResponse(
        request=request, name="partials/story_cards.html", context=context
    )


@router.get("/stories/{story_id}/modal", response_class=HTMLResponse)
async def story_modal(
    request: Request,
    story_id: int,
    story_repo: StoryRepoDep,
) -> HTMLResponse:
    """HTMX endpoint for the full-story overlay."""
    try:
        story = await story_repo.get_story(story_id)
    except NotFoundError as e:
        return templates.TemplateResponse(
            request=request,
            name="partials/story_modal_error.html",
            context={"message": e.message},
            status_code=404,
        )
    return templates.TemplateResponse(
        request=request, name="partials/story_modal.html", context={"story": story}
    )
