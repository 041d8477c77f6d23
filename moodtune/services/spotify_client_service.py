#!/usr/bin/env python3
"""
Client Spotify API - Échange OAuth (PKCE), refresh et requêtes Web API
"""

import os
import base64
import logging
from typing import Optional
import requests

from ..errors import AuthError, UpstreamError

ACCOUNTS_URL = "https://accounts.spotify.com"
API_URL = "https://api.spotify.com/v1"

DEFAULT_SCOPES = " ".join(
    [
        "user-read-private",
        "user-read-email",
        "user-top-read",
        "user-library-read",
        "playlist-read-private",
        "user-read-recently-played",
    ]
)


class SpotifyClient:
    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        redirect_uri: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """Client Spotify sans état: les jetons sont fournis à chaque appel.

        client_secret est optionnel: sans lui, le client se comporte comme un client
        public PKCE (client_id transmis dans le corps de la requête token).
        """
        self.client_id = client_id or os.getenv("SPOTIFY_CLIENT_ID")
        self.client_secret = client_secret or os.getenv("SPOTIFY_CLIENT_SECRET")
        self.redirect_uri = redirect_uri or os.getenv(
            "SPOTIFY_REDIRECT_URI", "http://localhost:8080/callback"
        )
        self.timeout = timeout or float(os.getenv("SPOTIFY_HTTP_TIMEOUT", "10"))
        self.scopes = os.getenv("SPOTIFY_SCOPES", DEFAULT_SCOPES)

    # === OAuth ===
    def get_auth_url(
        self, code_challenge: str, state: str, redirect_uri: Optional[str] = None
    ) -> str:
        """Générer l'URL d'autorisation Spotify (Authorization Code + PKCE)."""
        if not self.client_id:
            raise UpstreamError("SPOTIFY_CLIENT_ID non configuré", status_code=500)
        params = {
            "client_id": self.client_id,
            "response_type": "code",
            "redirect_uri": redirect_uri or self.redirect_uri,
            "scope": self.scopes,
            "state": state,
            "code_challenge_method": "S256",
            "code_challenge": code_challenge,
            # show_dialog=true force l'écran de consentement
            "show_dialog": os.getenv("SPOTIFY_SHOW_DIALOG", "true").lower(),
        }
        return f"{ACCOUNTS_URL}/authorize?{requests.compat.urlencode(params)}"

    def _token_request(self, data: dict) -> dict:
        headers = {"Content-Type": "application/x-www-form-urlencoded"}
        if self.client_secret:
            auth_string = f"{self.client_id}:{self.client_secret}"
            auth_base64 = base64.b64encode(auth_string.encode("utf-8")).decode("utf-8")
            headers["Authorization"] = f"Basic {auth_base64}"
        else:
            data = {**data, "client_id": self.client_id}

        try:
            response = requests.post(
                f"{ACCOUNTS_URL}/api/token",
                headers=headers,
                data=data,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise UpstreamError(f"Endpoint token Spotify injoignable: {e}")

        if response.status_code in (400, 401):
            # invalid_grant, code expiré, refresh token révoqué...
            logging.warning(
                "Spotify a refusé la requête token (%s): %s",
                response.status_code,
                response.text[:200],
            )
            raise AuthError("Identifiants Spotify refusés, reconnexion nécessaire")
        if not response.ok:
            raise UpstreamError(
                f"Endpoint token Spotify en erreur ({response.status_code})"
            )
        return response.json()

    def exchange_code(
        self, code: str, redirect_uri: Optional[str], code_verifier: str
    ) -> dict:
        """Échanger le code d'autorisation (+ verifier) contre des jetons."""
        return self._token_request(
            {
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": redirect_uri or self.redirect_uri,
                "code_verifier": code_verifier,
            }
        )

    def refresh_access_token(self, refresh_token: str) -> dict:
        """Obtenir un nouvel access token à partir du refresh token."""
        return self._token_request(
            {"grant_type": "refresh_token", "refresh_token": refresh_token}
        )

    # === Web API ===
    def _get(self, access_token: str, path: str, params=None) -> dict:
        headers = {"Authorization": f"Bearer {access_token}"}
        url = path if path.startswith("http") else f"{API_URL}{path}"
        try:
            response = requests.get(
                url, headers=headers, params=params, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise UpstreamError(f"API Spotify injoignable: {e}")

        if response.status_code == 401:
            raise AuthError("Jeton Spotify refusé")
        if not response.ok:
            logging.error(
                "API Spotify %s -> %s: %s",
                url.split("?")[0],
                response.status_code,
                response.text[:200],
            )
            raise UpstreamError(f"API Spotify en erreur ({response.status_code})")
        return response.json()

    def get_profile(self, access_token: str) -> dict:
        return self._get(access_token, "/me")

    def get_top_tracks(
        self, access_token: str, limit: int = 5, time_range: str = "medium_term"
    ) -> list:
        data = self._get(
            access_token,
            "/me/top/tracks",
            params={"limit": limit, "time_range": time_range},
        )
        return data.get("items") or []

    def get_recommendations(self, access_token: str, query: str) -> dict:
        """Appeler /recommendations avec une query string déjà construite."""
        return self._get(access_token, f"{API_URL}/recommendations?{query}")

    def search(self, access_token: str, query: str, type: str, limit: int) -> dict:
        return self._get(
            access_token,
            "/search",
            params={"q": query, "type": type, "limit": limit},
        )
