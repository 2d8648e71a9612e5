import asyncio
from typing import Optional
from urllib.parse import quote

import httpx
from loguru import logger

from ..config import config
from ..decoding import (
    decode_episode_detail,
    decode_episode_list,
    decode_episode_videos,
    decode_search_results,
)
from ..errors import AniMateError, InvalidQueryError, NetworkError
from ..models import AnimeResults, EpisodeDetail, EpisodeList, EpisodeVideo, EpisodeVideoList


class JikanClient:
    """
    Client for the Jikan anime API.

    This class handles:
    - Searching anime by title
    - Fetching an anime's episode list
    - Fetching a single episode's details
    - Fetching episode videos and matching them to an episode

    Every call issues exactly one GET request and either returns decoded
    models or raises an AniMateError subclass. Nothing is retried or
    cached; the only state held is the base URL and the HTTP client.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Base URL for the API (defaults to config value)
            timeout: Request timeout in seconds (defaults to config value)
            http_client: Pre-built httpx client to send requests through.
                An injected client is not closed by this class.
        """
        self.base_url = (base_url or config.jikan_api_base_url).rstrip('/')
        self.timeout = timeout if timeout is not None else config.request_timeout

        self._owns_client = http_client is None
        self.client = http_client or httpx.AsyncClient(
            timeout=self.timeout,
            headers={
                'Accept': 'application/json',
            }
        )

        logger.info(f"Initialized Jikan client with base URL: {self.base_url}")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit - cleanup the HTTP client."""
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    @staticmethod
    def escape_query(query: str) -> str:
        """
        Percent-encode a search query for use as the `q` parameter.

        Raises:
            InvalidQueryError: If the query is not text or cannot be
                encoded as UTF-8 (e.g. it contains lone surrogates)
        """
        if not isinstance(query, str):
            raise InvalidQueryError(f"Search query must be a string, got {type(query).__name__}")

        try:
            return quote(query, safe='')
        except UnicodeEncodeError as e:
            raise InvalidQueryError(f"Search query cannot be URL-encoded: {query!r}") from e

    async def _fetch(self, url: str, description: str) -> bytes:
        """
        GET a URL and return the raw body.

        Raises:
            NetworkError: On transport failure or a non-2xx status
        """
        logger.info(f"Fetching {description} from: {url}")

        try:
            response = await self.client.get(url)
            response.raise_for_status()

        except httpx.HTTPStatusError as e:
            error_msg = f"HTTP error {e.response.status_code} when fetching {description}"
            logger.error(error_msg)
            raise NetworkError(error_msg, status_code=e.response.status_code) from e

        except httpx.RequestError as e:
            error_msg = f"Network error when fetching {description}: {str(e)}"
            logger.error(error_msg)
            raise NetworkError(error_msg) from e

        return response.content

    async def search_anime(self, query: str) -> AnimeResults:
        """
        Search anime by title.

        Args:
            query: Free text entered by the user

        Returns:
            Matching anime in the order the API returned them

        Raises:
            InvalidQueryError: If the query cannot be URL-encoded
            NetworkError: If the request fails
            DecodeError: If the response body is not a valid search result
        """
        url = f"{self.base_url}/anime?q={self.escape_query(query)}"
        body = await self._fetch(url, f"search results for '{query}'")

        results = decode_search_results(body)
        logger.success(f"Search for '{query}' returned {len(results)} anime")
        return results

    async def list_episodes(self, anime_id: int) -> EpisodeList:
        """
        Fetch the episode list of an anime.

        Raises:
            NetworkError: If the request fails
            DecodeError: If the response body is not a valid episode list
        """
        url = f"{self.base_url}/anime/{anime_id}/episodes"
        body = await self._fetch(url, f"episodes of anime {anime_id}")

        episodes = decode_episode_list(body)
        logger.success(f"Fetched {len(episodes)} episodes of anime {anime_id}")
        return episodes

    async def get_episode_detail(self, anime_id: int, episode_number: int) -> EpisodeDetail:
        """
        Fetch the details of one episode.

        Raises:
            NetworkError: If the request fails
            DecodeError: If the response body is not a valid episode
        """
        url = f"{self.base_url}/anime/{anime_id}/episodes/{episode_number}"
        body = await self._fetch(url, f"episode {episode_number} of anime {anime_id}")

        detail = decode_episode_detail(body)
        logger.success(f"Fetched episode {episode_number} of anime {anime_id}: {detail.title}")
        return detail

    async def list_episode_videos(self, anime_id: int) -> EpisodeVideoList:
        """
        Fetch the episode videos of an anime.

        Raises:
            NetworkError: If the request fails
            DecodeError: If the response body is not a valid video list
        """
        url = f"{self.base_url}/anime/{anime_id}/videos/episodes"
        body = await self._fetch(url, f"episode videos of anime {anime_id}")

        videos = decode_episode_videos(body)
        logger.success(f"Fetched {len(videos)} episode videos of anime {anime_id}")
        return videos

    @staticmethod
    def find_episode_video(videos: EpisodeVideoList, episode_number: int) -> Optional[EpisodeVideo]:
        """Return the first video whose mal_id equals episode_number, or None."""
        return next((video for video in videos if video.mal_id == episode_number), None)

    async def get_episode_image_url(self, anime_id: int, episode_number: int) -> Optional[str]:
        """
        Look up the preview image of an episode via its video entry.

        Returns:
            The jpg image URL, or None if the anime has no video for
            that episode
        """
        videos = await self.list_episode_videos(anime_id)
        video = self.find_episode_video(videos, episode_number)

        if video is None:
            logger.info(f"No video found for episode {episode_number} of anime {anime_id}")
            return None

        return video.images.jpg.image_url

    async def get_episode_page(
        self, anime_id: int, episode_number: int
    ) -> tuple[EpisodeDetail, Optional[str]]:
        """
        Fetch an episode's details and preview image concurrently.

        The image is best effort: if the video lookup fails the error is
        logged and the image URL is None. A failed detail request is
        raised to the caller.

        Returns:
            Tuple of (episode detail, image URL or None)
        """
        detail, image_url = await asyncio.gather(
            self.get_episode_detail(anime_id, episode_number),
            self.get_episode_image_url(anime_id, episode_number),
            return_exceptions=True,
        )

        if isinstance(detail, BaseException):
            raise detail

        if isinstance(image_url, AniMateError):
            logger.warning(f"Episode image unavailable for episode {episode_number}: {image_url}")
            image_url = None
        elif isinstance(image_url, BaseException):
            raise image_url

        return detail, image_url
