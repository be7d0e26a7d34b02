"""REST API router aggregator."""

from fastapi import APIRouter

from storyshelf.api.rest.stories import router as stories_router

router = APIRouter(prefix="/api")
router.include_router(stories_router)
