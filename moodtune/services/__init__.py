#!/usr/bin/env python3
"""
Package moodtune.services
"""

from .spotify_client_service import SpotifyClient
from .token_store import TokenStore, UserCredential, is_expired
from .mood import MoodProfile, get_mood_profile
from .recommendations import RecommendationRequestBuilder

__all__ = [
    "SpotifyClient",
    "TokenStore",
    "UserCredential",
    "is_expired",
    "MoodProfile",
    "get_mood_profile",
    "RecommendationRequestBuilder",
]
