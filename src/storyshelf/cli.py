"""Command-line entry point: serve the library or browse a running server."""

import argparse
import asyncio
import logging

import uvicorn

from storyshelf.client.api_client import StoryApiClient, StoryApiError
from storyshelf.client.library import LibrarySession
from storyshelf.client.projection import ALL_GENRES, SORT_POPULAR, STATUS_ALL, StoryCard
from storyshelf.config import get_settings

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    """Create CLI args for the server and the browsing commands."""
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Personal story library.")
    parser.add_argument("--api-url", default=settings.api_base_url)
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Run the HTTP server.")
    serve.add_argument("--host", default=settings.host)
    serve.add_argument("--port", type=int, default=settings.port)
    serve.add_argument("--reload", action="store_true")

    list_cmd = commands.add_parser("list", help="Show story cards.")
    list_cmd.add_argument("--genre", default=ALL_GENRES)
    list_cmd.add_argument("--sort", default=SORT_POPULAR)
    list_cmd.add_argument("--status", default=STATUS_ALL)

    show = commands.add_parser("show", help="Print one story in full.")
    show.add_argument("story_id", type=int)

    add = commands.add_parser("add", help="Create a story.")
    add.add_argument("title")
    add.add_argument("full_text")

    update = commands.add_parser("update", help="Replace a story's title and text.")
    update.add_argument("story_id", type=int)
    update.add_argument("title")
    update.add_argument("full_text")

    delete = commands.add_parser("delete", help="Delete a story.")
    delete.add_argument("story_id", type=int)
    return parser


def format_card(card: StoryCard) -> str:
    return (
        f"[{card.id}] {card.title} ({card.badge})\n"
        f"    {card.description}\n"
        f"    {card.likes} Likes | {card.views} Views"
    )


async def run_client_command(parsed: argparse.Namespace) -> None:
    """Execute a browsing command against the API at ``--api-url``."""
    async with StoryApiClient(base_url=parsed.api_url) as client:
        library = LibrarySession(client, alert=print)

        if parsed.command == "list":
            await library.refresh()
            library.select_genre(parsed.genre)
            library.select_sort(parsed.sort)
            for card in library.select_status(parsed.status):
                print(format_card(card))
        elif parsed.command == "show":
            story = await library.open_story(parsed.story_id)
            print(story.title)
            print()
            print(story.full_text)
        elif parsed.command == "add":
            if await library.create_story(parsed.title, parsed.full_text):
                print(f"Saved. Library now has {len(library.stories)} stories.")
        elif parsed.command == "update":
            story = await client.update_story(parsed.story_id, parsed.title, parsed.full_text)
            print(f"Updated story {story.id}.")
        elif parsed.command == "delete":
            await client.delete_story(parsed.story_id)
            print(f"Deleted story {parsed.story_id}.")


def main(argv: list[str] | None = None) -> None:
    """Parse CLI flags and dispatch to uvicorn or the API client."""
    parser = build_arg_parser()
    parsed = parser.parse_args(argv)

    if parsed.command == "serve":
        uvicorn.run(
            "storyshelf.main:app",
            host=str(parsed.host),
            port=int(parsed.port),
            reload=bool(parsed.reload),
        )
        return

    try:
        asyncio.run(run_client_command(parsed))
    except StoryApiError as e:
        logger.error(f"{parsed.command} failed: {e}")
        parser.exit(1, f"error: {e.message}\n")


if __name__ == "__main__":
    main()
