"""Story domain entities."""

from dataclasses import dataclass

from storyshelf.domain.errors import ValidationError

MISSING_FIELDS_MESSAGE = "Missing title or full_text"


@dataclass
class Story:
    """A persisted story with its complete body."""

    id: int | None
    title: str
    full_text: str

    @staticmethod
    def validate_fields(title: str | None, full_text: str | None) -> None:
        """Reject empty or missing title/body before touching the store."""
        if not title or not full_text:
            raise ValidationError(MISSING_FIELDS_MESSAGE)

    @classmethod
    def from_api(cls, data: dict) -> "Story":
        """Create Story from a JSON API response."""
        return cls(
            id=data.get("id"),
            title=data.get("title", ""),
            full_text=data.get("full_text", ""),
        )


@dataclass
class StorySummary:
    """List-view projection of a story.

    Only ``id`` and ``title`` come from the store. The remaining fields are
    presentation decoration assigned on the client at fetch time and are never
    persisted; see ``storyshelf.client.projection.decorate``.
    """

    id: int
    title: str
    genre: str = ""
    likes: int = 0
    views: int = 0
    read: bool = False
    description: str = ""
