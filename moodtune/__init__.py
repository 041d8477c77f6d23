#!/usr/bin/env python3
"""
MoodTune API - recommandations Spotify par humeur (OAuth PKCE + refresh paresseux)
"""
