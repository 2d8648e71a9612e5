"""
Formatting helpers for presenting decoded models.

The decoding layer keeps dates as the raw strings the API sends
(e.g. "2002-10-03T00:00:00+00:00"); turning them into calendar
values happens here, at display time. Unparseable dates yield None
so the caller can simply leave the line out.
"""

from datetime import datetime
from typing import List, Optional, Union

from .models import Anime, Episode, EpisodeDetail

API_DATE_FORMAT = '%Y-%m-%dT%H:%M:%S%z'
MAX_STARS = 5


def parse_api_date(date_string: Optional[str]) -> Optional[datetime]:
    if not date_string:
        return None
    try:
        return datetime.strptime(date_string, API_DATE_FORMAT)
    except ValueError:
        return None


def display_title(anime: Anime) -> str:
    """English title when the API has one, otherwise the default title."""
    return anime.title_english or anime.title


def extract_year(date_string: Optional[str]) -> Optional[int]:
    parsed = parse_api_date(date_string)
    return parsed.year if parsed else None


def format_episode_date(date_string: Optional[str]) -> Optional[str]:
    """Short air date for episode lists, e.g. "October 3 | 2002"."""
    parsed = parse_api_date(date_string)
    if parsed is None:
        return None
    return f"{parsed:%B} {parsed.day} | {parsed.year}"


def format_detailed_date(date_string: Optional[str]) -> Optional[str]:
    """
    Long air date for the episode page.

    Example: "Thursday, October 3, 2002 at 12:00 AM"
    """
    parsed = parse_api_date(date_string)
    if parsed is None:
        return None

    hour = parsed.hour % 12 or 12
    meridiem = 'AM' if parsed.hour < 12 else 'PM'
    return f"{parsed:%A}, {parsed:%B} {parsed.day}, {parsed.year} at {hour}:{parsed:%M} {meridiem}"


def format_score(score: Optional[float]) -> Optional[str]:
    return f"{score:.1f}" if score is not None else None


def star_rating(score: Optional[float]) -> int:
    """Number of filled stars (out of five) shown for an episode score."""
    if score is None:
        return 0
    return max(0, min(MAX_STARS, int(score)))


def episode_badges(episode: Union[Episode, EpisodeDetail]) -> List[str]:
    badges = []
    if episode.filler:
        badges.append('Filler')
    if episode.recap:
        badges.append('Recap')
    return badges


def anime_summary_lines(anime: Anime) -> List[str]:
    """Title, year and score lines as shown on a search result or list card."""
    lines = [display_title(anime)]

    year = extract_year(anime.aired.from_ if anime.aired else None)
    if year is not None:
        lines.append(f"Year: {year}")

    if anime.score is not None:
        lines.append(f"Score: {format_score(anime.score)}")

    return lines
