import threading
from typing import Iterator, List, Union

from loguru import logger

from ..models import Anime


class AnimeList:
    """
    In-memory list of the anime a user has saved.

    This class provides methods to:
    - Add an anime, skipping titles already in the list
    - Read the saved anime in the order they were added

    Entries are unique by mal_id. The existence check and the append run
    under one lock so concurrent writers cannot insert the same title twice.
    """

    def __init__(self):
        """Initialize an empty list."""
        self._entries: List[Anime] = []
        self._ids: set[int] = set()
        self._lock = threading.Lock()

    def add(self, anime: Anime) -> bool:
        """
        Append an anime unless one with the same mal_id is already saved.

        Args:
            anime: Anime to save

        Returns:
            True if it was added, False if it was already in the list
        """
        with self._lock:
            if anime.mal_id in self._ids:
                logger.info(f"Anime already in list: {anime.title_english or anime.title}")
                return False

            self._entries.append(anime)
            self._ids.add(anime.mal_id)

        logger.info(f"Added anime {anime.mal_id} to list: {anime.title_english or anime.title}")
        return True

    def all(self) -> List[Anime]:
        """Return a copy of the saved anime in insertion order."""
        with self._lock:
            return list(self._entries)

    def __contains__(self, item: Union[Anime, int]) -> bool:
        mal_id = item.mal_id if isinstance(item, Anime) else item
        with self._lock:
            return mal_id in self._ids

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[Anime]:
        return iter(self.all())
