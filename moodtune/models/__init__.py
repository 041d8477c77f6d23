#!/usr/bin/env python3
"""
Package moodtune.models
"""

from .credential import SpotifyToken

__all__ = ["SpotifyToken"]
