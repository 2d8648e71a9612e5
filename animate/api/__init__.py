"""
API package for AniMate.

Contains the Jikan client used to search anime and browse episodes.
"""

from .api_client import JikanClient

__all__ = ['JikanClient']
