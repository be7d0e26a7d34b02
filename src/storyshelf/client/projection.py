"""Client-side projection of the story list.

Everything here is pure: functions take the fetched summaries and an explicit
``ViewState`` and return new values. Only ``toggle_read`` mutates, and only
the in-memory summary it is given.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from storyshelf.domain.story import StorySummary

GENRES = ("Fantasy", "Adventure", "Sci-Fi")
ALL_GENRES = "All"
DEFAULT_DESCRIPTION = "Click the title to read the full story."

SORT_POPULAR = "popular"
SORT_RECENT = "recent"
SORT_LIKED = "liked"

STATUS_ALL = "all"
STATUS_READ = "read"
STATUS_UNREAD = "unread"


@dataclass(frozen=True)
class ViewState:
    """Selected filters for the library view."""

    genre: str = ALL_GENRES
    sort: str = SORT_POPULAR
    status: str = STATUS_ALL


@dataclass(frozen=True)
class StoryCard:
    """Everything a single story card displays."""

    id: int
    title: str
    description: str
    read: bool
    badge: str
    likes: int
    views: int
    toggle_label: str


def decorate(rows: Iterable[StorySummary | dict]) -> list[StorySummary]:
    """Attach demo presentation fields to freshly fetched summaries.

    Genre, likes and views are derived from list position only. None of these
    fields exist in the store; they are recomputed on every fetch and any
    earlier read-state is dropped.
    """
    stories = []
    for idx, row in enumerate(rows):
        if isinstance(row, dict):
            story_id, title = row["id"], row["title"]
        else:
            story_id, title = row.id, row.title
        stories.append(
            StorySummary(
                id=story_id,
                title=title,
                genre=GENRES[idx % len(GENRES)],
                likes=100 + idx * 10,
                views=200 + idx * 20,
                read=False,
                description=DEFAULT_DESCRIPTION,
            )
        )
    return stories


def matches_genre(story: StorySummary, genre: str) -> bool:
    return genre == ALL_GENRES or story.genre == genre


def matches_status(story: StorySummary, status: str) -> bool:
    # Anything other than "all" or "read" means unread
    if status == STATUS_ALL:
        return True
    if status == STATUS_READ:
        return story.read
    return not story.read


def project(stories: Sequence[StorySummary], state: ViewState) -> list[StorySummary]:
    """Filter then sort summaries for display.

    ``popular`` and ``liked`` order by likes, ``recent`` by id, both
    descending. Unknown sort keys keep filter order. Ties keep their prior
    relative order.
    """
    filtered = [
        s for s in stories
        if matches_genre(s, state.genre) and matches_status(s, state.status)
    ]

    if state.sort in (SORT_POPULAR, SORT_LIKED):
        return sorted(filtered, key=lambda s: s.likes, reverse=True)
    if state.sort == SORT_RECENT:
        return sorted(filtered, key=lambda s: s.id, reverse=True)
    return filtered


def build_cards(stories: Iterable[StorySummary]) -> list[StoryCard]:
    """Turn projected summaries into display cards."""
    return [
        StoryCard(
            id=s.id,
            title=s.title,
            description=s.description,
            read=s.read,
            badge="Read" if s.read else "Unread",
            likes=s.likes,
            views=s.views,
            toggle_label="Mark Unread" if s.read else "Mark Read",
        )
        for s in stories
    ]


def render(stories: Sequence[StorySummary], state: ViewState) -> list[StoryCard]:
    """Full rendering pass: filter, sort, then build cards."""
    return build_cards(project(stories, state))


def toggle_read(stories: Sequence[StorySummary], story_id: int) -> StorySummary | None:
    """Flip ``read`` on the summary with this id, in place.

    Returns:
        The toggled summary, or None if no summary has this id
    """
    for story in stories:
        if story.id == story_id:
            story.read = not story.read
            return story
    return None
