#!/usr/bin/env python3
"""
Erreurs métier de l'API, converties en réponses HTTP par les handlers de main.py
"""


class MoodTuneError(Exception):
    status_code = 400

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(MoodTuneError):
    """Entrée obligatoire manquante ou invalide (code, query, mood/trackId...)."""

    status_code = 400


class AuthError(MoodTuneError):
    """Pas d'identité appelante, refresh token expiré/révoqué ou refusé par Spotify.

    L'appelant doit relancer une autorisation complète, jamais réessayer.
    """

    status_code = 401


class UpstreamError(MoodTuneError):
    """Appel Spotify en échec (réseau ou statut non-2xx)."""

    status_code = 502
