"""
Decoding of Jikan response bodies into domain models.

Each decode function accepts the raw body (bytes or str) or an already
parsed JSON tree and returns the typed value. A body that does not
match the expected shape is discarded as a whole: the caller gets a
DecodeError (or MissingFieldError for an absent required field) and
never a partially decoded value.
"""

from typing import Any, Optional, Type, TypeVar, Union

from loguru import logger
from pydantic import BaseModel, ValidationError

from .errors import DecodeError, MissingFieldError
from .models import (
    AnimeResults,
    EpisodeDetail,
    EpisodeDetailResponse,
    EpisodeList,
    EpisodesResponse,
    EpisodeVideoList,
    EpisodeVideoResponse,
    SearchResults,
)

RawPayload = Union[bytes, str, dict, list]
EnvelopeT = TypeVar("EnvelopeT", bound=BaseModel)


def _missing_field_name(error: ValidationError) -> Optional[str]:
    """Name of the first required field reported missing, if any."""
    for detail in error.errors():
        if detail["type"] == "missing":
            names = [part for part in detail["loc"] if isinstance(part, str)]
            if names:
                return names[-1]
    return None


def _decode(envelope: Type[EnvelopeT], payload: RawPayload) -> EnvelopeT:
    try:
        if isinstance(payload, (bytes, bytearray, str)):
            return envelope.model_validate_json(payload)
        return envelope.model_validate(payload)
    except ValidationError as e:
        missing = _missing_field_name(e)
        if missing is not None:
            logger.error(f"{envelope.__name__} is missing required field '{missing}'")
            raise MissingFieldError(missing) from e

        detail = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or '<body>'}: {err['msg']}"
            for err in e.errors()
        )
        logger.error(f"Failed to decode {envelope.__name__}: {detail}")
        raise DecodeError(detail) from e


def decode_search_results(payload: Any) -> AnimeResults:
    """Decode a `GET /anime?q=` body into anime, in response order."""
    return _decode(SearchResults, payload).data


def decode_episode_list(payload: Any) -> EpisodeList:
    """Decode a `GET /anime/{id}/episodes` body."""
    return _decode(EpisodesResponse, payload).data


def decode_episode_detail(payload: Any) -> EpisodeDetail:
    """Decode a `GET /anime/{id}/episodes/{number}` body."""
    return _decode(EpisodeDetailResponse, payload).data


def decode_episode_videos(payload: Any) -> EpisodeVideoList:
    """Decode a `GET /anime/{id}/videos/episodes` body."""
    return _decode(EpisodeVideoResponse, payload).data
