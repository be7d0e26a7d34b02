"""First-run seeding of demo stories."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from storyshelf.repositories.story_repo import StoryRepository

logger = logging.getLogger(__name__)

DEMO_STORIES: list[tuple[str, str]] = [
    (
        "The Enchanted Forest",
        "Once upon a time, in a forest filled with magical creatures, a young girl "
        "named Lily discovered a hidden path that led to a world beyond her "
        "imagination...",
    ),
    (
        "The Lost Treasure",
        "Captain Redbeard had searched the seven seas for the legendary lost "
        "treasure. One stormy night, his map revealed a clue that would change "
        "everything...",
    ),
]


async def seed_demo_stories(session: AsyncSession) -> int:
    """Insert the demo stories when the table is empty.

    Returns:
        Number of stories inserted (0 if the table already had rows)
    """
    repo = StoryRepository(session)
    existing = await repo.count()
    if existing:
        logger.info(f"Skipping seed, {existing} stories already stored")
        return 0

    for title, full_text in DEMO_STORIES:
        await repo.create_story(title, full_text)

    logger.info(f"Seeded {len(DEMO_STORIES)} demo stories")
    return len(DEMO_STORIES)
