"""
AniMate core.

Search the Jikan anime database, keep a personal list of titles, and
browse episode metadata, independent of any UI framework.
"""

from .api import JikanClient
from .errors import AniMateError, DecodeError, InvalidQueryError, MissingFieldError, NetworkError
from .store import AnimeList

__all__ = [
    'JikanClient',
    'AnimeList',
    'AniMateError',
    'InvalidQueryError',
    'NetworkError',
    'DecodeError',
    'MissingFieldError',
]
