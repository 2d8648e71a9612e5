"""
Data models for the AniMate core.

These Pydantic models mirror the Jikan v4 payloads the app consumes.
They are frozen value objects: decoded fresh on every response and
never mutated afterwards. Unknown fields in a payload are ignored.

Optional fields are lenient. A missing, null, or malformed value
decodes to None instead of failing the whole response; only the
required fields are hard constraints.
"""

from typing import Any, Optional

from loguru import logger
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)


def _none_if_invalid(value: Any, handler: ValidatorFunctionWrapHandler, field_name: str) -> Any:
    try:
        return handler(value)
    except ValidationError as e:
        logger.debug(f"Dropping malformed optional field '{field_name}': {e.errors()[0]['msg']}")
        return None


class JikanModel(BaseModel):
    """Base for every decoded Jikan record."""
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class ImageUrls(JikanModel):
    """Image URLs for one format (jpg or webp)."""
    image_url: str
    small_image_url: str
    large_image_url: str


class ImageSet(JikanModel):
    """
    Artwork for an anime, keyed by image format.
    """
    jpg: ImageUrls
    webp: ImageUrls


class AiredRange(JikanModel):
    """
    Start and end of an anime's broadcast run.

    Both ends are ISO-8601 strings with a zone offset, kept as opaque
    strings here. `from` is a Python keyword so the start is exposed
    as `from_`.
    """
    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None

    @field_validator('from_', 'to', mode='wrap')
    @classmethod
    def lenient_optional(cls, v, handler, info):
        return _none_if_invalid(v, handler, info.field_name)


class Anime(JikanModel):
    """
    An anime as returned by the search endpoint.

    `mal_id` is the MyAnimeList identifier and is what the saved list
    uses to tell titles apart.
    """
    mal_id: int
    url: str
    images: ImageSet
    title: str
    title_english: Optional[str] = None
    title_japanese: str
    type: str
    episodes: Optional[int] = None  # Unknown while a show is still airing
    status: str
    score: Optional[float] = None
    synopsis: Optional[str] = None
    aired: Optional[AiredRange] = None

    @field_validator('title_english', 'episodes', 'score', 'synopsis', 'aired', mode='wrap')
    @classmethod
    def lenient_optional(cls, v, handler, info):
        return _none_if_invalid(v, handler, info.field_name)


class Episode(JikanModel):
    """
    One entry of an anime's episode list.

    `mal_id` here is the episode number within its parent anime.
    """
    mal_id: int
    title: str
    aired: Optional[str] = None
    score: Optional[float] = None
    filler: bool
    recap: bool

    @field_validator('aired', 'score', mode='wrap')
    @classmethod
    def lenient_optional(cls, v, handler, info):
        return _none_if_invalid(v, handler, info.field_name)


class EpisodeDetail(JikanModel):
    """
    Full details of a single episode.

    `duration` is passed through exactly as the API reports it.
    """
    mal_id: int
    url: str
    title: str
    title_japanese: Optional[str] = None
    title_romanji: Optional[str] = None
    duration: Optional[int] = None
    aired: Optional[str] = None
    filler: bool
    recap: bool
    synopsis: Optional[str] = None

    @field_validator(
        'title_japanese', 'title_romanji', 'duration', 'aired', 'synopsis', mode='wrap'
    )
    @classmethod
    def lenient_optional(cls, v, handler, info):
        return _none_if_invalid(v, handler, info.field_name)


class VideoImageUrl(JikanModel):
    image_url: str


class EpisodeImage(JikanModel):
    jpg: VideoImageUrl


class EpisodeVideo(JikanModel):
    """
    A promotional episode video entry.

    `episode` is a display label such as "Episode 1"; `mal_id` is the
    episode number used to match a video against an episode.
    """
    mal_id: int
    title: str
    episode: str
    url: str
    images: EpisodeImage


# Response envelopes - every Jikan payload wraps its content in `data`

class SearchResults(JikanModel):
    data: list[Anime]


class EpisodesResponse(JikanModel):
    data: list[Episode]


class EpisodeDetailResponse(JikanModel):
    data: EpisodeDetail


class EpisodeVideoResponse(JikanModel):
    data: list[EpisodeVideo]


# Type aliases for clarity
AnimeResults = list[Anime]
EpisodeList = list[Episode]
EpisodeVideoList = list[EpisodeVideo]
