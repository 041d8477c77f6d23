import logging
from typing import Optional
from sqlalchemy.orm import Session

from ..errors import AuthError, ValidationError
from ..services.mood import get_mood_profile
from ..services.recommendations import RecommendationRequestBuilder
from ..services.spotify_client_service import SpotifyClient
from ..services.state import AppState, get_state
from ..services.token_store import DEFAULT_TTL_SECONDS, TokenStore
from ..utils.pkce import generate_pkce_pair, generate_state


class SpotifyController:
    def __init__(self, client: SpotifyClient, state: Optional[AppState] = None):
        self.client = client
        self.state = state or get_state()

    def auth_url(self, uid: str, redirect_uri: Optional[str] = None) -> dict:
        """Générer verifier/challenge, mémoriser le verifier et renvoyer l'URL d'autorisation."""
        verifier, challenge = generate_pkce_pair()
        state = generate_state()
        url = self.client.get_auth_url(challenge, state, redirect_uri)
        self.state.pending_verifiers.put(state, uid, verifier)
        return {"url": url, "state": state}

    def exchange(
        self,
        db: Session,
        uid: str,
        code: Optional[str],
        redirect_uri: Optional[str] = None,
        code_verifier: Optional[str] = None,
        state: Optional[str] = None,
    ) -> dict:
        # Le verifier mémorisé est consommé avant toute validation: jamais rejouable
        stored_verifier = self.state.pending_verifiers.pop(state, uid) if state else None
        if not code:
            raise ValidationError("Paramètre 'code' manquant")
        verifier = code_verifier or stored_verifier
        if not verifier:
            raise ValidationError("code_verifier manquant ou state inconnu/expiré")

        logging.info("Échange du code Spotify pour %s", uid)
        token_data = self.client.exchange_code(code, redirect_uri, verifier)
        access_token = token_data.get("access_token")
        if not access_token:
            raise AuthError("Réponse token Spotify sans access_token")

        profile = self.client.get_profile(access_token)
        TokenStore(db, self.client).store(
            uid,
            access_token,
            token_data.get("refresh_token"),
            token_data.get("expires_in") or DEFAULT_TTL_SECONDS,
        )
        logging.info("🎉 Jetons Spotify enregistrés pour %s", uid)
        return {
            "success": True,
            "profile": {
                "id": profile.get("id"),
                "display_name": profile.get("display_name"),
                "email": profile.get("email"),
                "images": profile.get("images") or [],
            },
        }

    def status(self, db: Session, uid: str) -> dict:
        cred = TokenStore(db, self.client).get(uid)
        return {"connected": bool(cred), "expires_at": cred.expires_at if cred else None}

    def disconnect(self, db: Session, uid: str) -> bool:
        removed = TokenStore(db, self.client).delete(uid)
        if removed:
            logging.info("🔌 Spotify déconnecté pour %s", uid)
        return removed

    def recommendations(
        self,
        db: Session,
        uid: str,
        mood: Optional[str] = None,
        track_id: Optional[str] = None,
        limit: int = 20,
    ) -> list:
        # Valider avant tout appel sortant (y compris un éventuel refresh)
        if not get_mood_profile(mood) and not (track_id or "").strip():
            raise ValidationError("mood ou trackId requis")

        access_token = TokenStore(db, self.client).get_valid_access_token(uid)
        query = RecommendationRequestBuilder(self.client).build(
            access_token, mood=mood, track_id=track_id, limit=limit
        )
        logging.debug("Requête recommandations: %s", query)
        data = self.client.get_recommendations(access_token, query)
        tracks = [t for t in (data.get("tracks") or []) if t]
        logging.info("%d recommandation(s) pour %s", len(tracks), uid)
        return tracks

    def search(
        self,
        db: Session,
        uid: str,
        query: Optional[str],
        type: str = "track",
        limit: int = 10,
    ) -> dict:
        if not query or not query.strip():
            raise ValidationError("Paramètre 'query' manquant")
        access_token = TokenStore(db, self.client).get_valid_access_token(uid)
        return self.client.search(access_token, query.strip(), type or "track", limit)
