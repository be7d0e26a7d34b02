"""Pydantic schemas for API request/response models."""

from pydantic import BaseModel, ConfigDict


class StoryPayload(BaseModel):
    """Request body for creating or replacing a story.

    Both fields are optional at the schema level so that presence and
    emptiness are reported together as a 400 by the store's validation.
    """

    title: str | None = None
    full_text: str | None = None


class StorySummaryResponse(BaseModel):
    """Response schema for a story in list views (no full text)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str


class StoryResponse(BaseModel):
    """Response schema for a complete story."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    full_text: str


class DeleteResponse(BaseModel):
    """Response schema for delete operation."""

    success: bool


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""

    error: str
