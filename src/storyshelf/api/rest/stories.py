"""Story API endpoints."""

from fastapi import APIRouter

from storyshelf.api.dependencies import StoryRepoDep
from storyshelf.api.rest.schemas import (
    DeleteResponse,
    ErrorResponse,
    StoryPayload,
    StoryResponse,
    StorySummaryResponse,
)

router = APIRouter(
    prefix="/stories",
    tags=["stories"],
    responses={500: {"model": ErrorResponse}},
)


@router.get("", response_model=list[StorySummaryResponse])
async def list_stories(story_repo: StoryRepoDep) -> list[StorySummaryResponse]:
    """List all stories as id and title only."""
    stories = await story_repo.list_stories()
    return [StorySummaryResponse.model_validate(s) for s in stories]


@router.get(
    "/{story_id}",
    response_model=StoryResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_story(story_id: int, story_repo: StoryRepoDep) -> StoryResponse:
    """Get a single story including its full text."""
    story = await story_repo.get_story(story_id)
    return StoryResponse.model_validate(story)


@router.post(
    "",
    response_model=StoryResponse,
    responses={400: {"model": ErrorResponse}},
)
async def create_story(payload: StoryPayload, story_repo: StoryRepoDep) -> StoryResponse:
    """Add a new story."""
    story = await story_repo.create_story(payload.title, payload.full_text)
    return StoryResponse.model_validate(story)


@router.put(
    "/{story_id}",
    response_model=StoryResponse,
    responses={400: {"model": ErrorResponse}},
)
async def update_story(
    story_id: int,
    payload: StoryPayload,
    story_repo: StoryRepoDep,
) -> StoryResponse:
    """Replace a story's title and text.

    Responds 200 with the submitted values whether or not the id exists.
    """
    story = await story_repo.update_story(story_id, payload.title, payload.full_text)
    return StoryResponse.model_validate(story)


@router.delete("/{story_id}", response_model=DeleteResponse)
async def delete_story(story_id: int, story_repo: StoryRepoDep) -> DeleteResponse:
    """Delete a story. Unknown ids still report success."""
    success = await story_repo.delete_story(story_id)
    return DeleteResponse(success=success)
