"""
Store package for AniMate.

Holds the user's saved anime list.
"""

from .anime_list import AnimeList

__all__ = ['AnimeList']
