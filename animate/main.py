"""
Main application for AniMate.

This module contains the headless application logic that:
- Searches anime and keeps the latest results
- Saves anime to the user's list
- Loads an anime's episodes
- Loads a single episode's details and preview image
- Prints results for the console entry point

A failed request never clobbers what was loaded before: the session
keeps its previous state, records the error, and reports failure.
"""

import asyncio
import sys
from typing import List, Optional, Sequence

from loguru import logger

from .api import JikanClient
from .config import config
from .display import (
    anime_summary_lines,
    display_title,
    episode_badges,
    format_detailed_date,
    format_episode_date,
    star_rating,
)
from .errors import AniMateError
from .models import Anime, AnimeResults, EpisodeDetail, EpisodeList
from .store import AnimeList


class AniMateSession:
    """
    State behind the app's screens.

    This class wires the Jikan client to the saved list and keeps:
    1. The latest search results
    2. The episodes of the anime being browsed
    3. The episode detail and image being viewed
    """

    def __init__(self, api_client: Optional[JikanClient] = None, anime_list: Optional[AnimeList] = None):
        """
        Initialize the session.

        Args:
            api_client: Client to fetch data with (a default one is built if omitted)
            anime_list: Saved list to add anime to (a new empty one if omitted)
        """
        self.api_client = api_client if api_client is not None else JikanClient()
        self.anime_list = anime_list if anime_list is not None else AnimeList()

        self.search_results: AnimeResults = []
        self.episodes: EpisodeList = []
        self.episode_detail: Optional[EpisodeDetail] = None
        self.episode_image_url: Optional[str] = None
        self.last_error: Optional[AniMateError] = None

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.api_client.__aexit__(exc_type, exc_val, exc_tb)

    def _record_failure(self, action: str, error: AniMateError) -> bool:
        logger.error(f"{action} failed: {error}")
        self.last_error = error
        return False

    async def search(self, query: str) -> bool:
        """
        Run a search and replace the current results on success.

        Returns:
            True if the results were updated
        """
        try:
            results = await self.api_client.search_anime(query)
        except AniMateError as e:
            return self._record_failure(f"Search for '{query}'", e)

        self.search_results = results
        self.last_error = None
        return True

    async def load_episodes(self, anime_id: int) -> bool:
        try:
            episodes = await self.api_client.list_episodes(anime_id)
        except AniMateError as e:
            return self._record_failure(f"Loading episodes of anime {anime_id}", e)

        self.episodes = episodes
        self.last_error = None
        return True

    async def load_episode(self, anime_id: int, episode_number: int) -> bool:
        """
        Load an episode's details and image together.

        Returns:
            True if the episode was updated
        """
        try:
            detail, image_url = await self.api_client.get_episode_page(anime_id, episode_number)
        except AniMateError as e:
            return self._record_failure(f"Loading episode {episode_number} of anime {anime_id}", e)

        self.episode_detail = detail
        self.episode_image_url = image_url
        self.last_error = None
        return True

    def add_to_list(self, anime: Anime) -> bool:
        return self.anime_list.add(anime)

    def my_list(self) -> List[Anime]:
        return self.anime_list.all()


def print_search_results(results: AnimeResults) -> None:
    print("\n" + "=" * 60)
    print(f"SEARCH RESULTS ({len(results)})")
    print("=" * 60)
    for anime in results:
        title, *details = anime_summary_lines(anime)
        print(f"[{anime.mal_id}] {title}")
        for line in details:
            print(f"    {line}")
    print("=" * 60)


def print_episodes(episodes: EpisodeList) -> None:
    print("\n" + "=" * 60)
    print(f"EPISODES ({len(episodes)})")
    print("=" * 60)
    for episode in episodes:
        print(f"{episode.mal_id}. {episode.title}")

        aired = format_episode_date(episode.aired)
        if aired:
            print(f"    {aired}")

        markers = []
        if episode.score is not None:
            stars = star_rating(episode.score)
            markers.append("*" * stars + "." * (5 - stars))
        markers.extend(episode_badges(episode))
        if markers:
            print(f"    {' '.join(markers)}")
    print("=" * 60)


def print_episode(episode_number: int, detail: EpisodeDetail, image_url: Optional[str]) -> None:
    print("\n" + "=" * 60)
    print(f"Episode {episode_number}: {detail.title}")
    print("=" * 60)

    aired = format_detailed_date(detail.aired)
    if aired:
        print(f"Aired: {aired}")
    if image_url:
        print(f"Image: {image_url}")
    if detail.synopsis:
        print(f"Synopsis: {detail.synopsis}")
    print("=" * 60)


USAGE = """Usage:
    python main.py search <query>               # Search anime by title
    python main.py episodes <anime_id>          # List an anime's episodes
    python main.py episode <anime_id> <number>  # Show one episode
    python main.py --help                       # Show this help"""


def setup_logging() -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level}</level> | {message}",
        level=config.log_level
    )


# Main CLI entry point
async def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run one console command and return the process exit code.

    Args:
        argv: Command line arguments without the program name
    """
    args = list(sys.argv[1:] if argv is None else argv)
    setup_logging()

    if not args or args[0] in ['--help', '-h', 'help']:
        print(USAGE)
        return 0

    command, params = args[0], args[1:]

    try:
        async with AniMateSession() as session:
            if command == 'search' and params:
                query = " ".join(params)
                if not await session.search(query):
                    return 1
                print_search_results(session.search_results)

            elif command == 'episodes' and len(params) == 1:
                if not await session.load_episodes(int(params[0])):
                    return 1
                print_episodes(session.episodes)

            elif command == 'episode' and len(params) == 2:
                anime_id, episode_number = int(params[0]), int(params[1])
                if not await session.load_episode(anime_id, episode_number):
                    return 1
                print_episode(episode_number, session.episode_detail, session.episode_image_url)

            else:
                print(f"Unknown command or wrong arguments: {' '.join(args)}")
                print("Run 'python main.py --help' for usage information.")
                return 1

    except ValueError:
        print("Anime ids and episode numbers must be integers.")
        return 1

    return 0


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
