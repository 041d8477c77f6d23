from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
from sqlalchemy.orm import Session

from ..errors import AuthError
from ..models.credential import SpotifyToken
from .spotify_client_service import SpotifyClient
import moodtune.utils.encryption as enc

DEFAULT_TTL_SECONDS = 3600


@dataclass(frozen=True)
class UserCredential:
    user_id: str
    access_token: str
    refresh_token: str
    expires_at: datetime


def is_expired(credential: UserCredential, now: datetime | None = None) -> bool:
    return (now or datetime.utcnow()) >= credential.expires_at


class TokenStore:
    """Persistance des jetons Spotify (une ligne par utilisateur) et refresh paresseux."""

    def __init__(self, db: Session, client: SpotifyClient):
        self.db = db
        self.client = client

    def _row(self, user_id: str) -> Optional[SpotifyToken]:
        return self.db.query(SpotifyToken).filter(SpotifyToken.user_id == user_id).first()

    def _to_credential(self, row: SpotifyToken) -> UserCredential:
        access_token = enc.decrypt_str(row.access_token)
        refresh_token = enc.decrypt_str(row.refresh_token)
        # Toujours chiffré après decrypt: clé changée ou donnée corrompue
        if enc.is_encrypted(access_token) or enc.is_encrypted(refresh_token):
            logging.error("Jetons Spotify indéchiffrables pour %s", row.user_id)
            raise AuthError("Jetons Spotify illisibles, reconnexion nécessaire")
        return UserCredential(
            user_id=row.user_id,
            access_token=access_token or "",
            refresh_token=refresh_token or "",
            expires_at=row.expires_at,
        )

    def store(
        self,
        user_id: str,
        access_token: str,
        refresh_token: Optional[str],
        ttl_seconds: int | None = None,
        now: datetime | None = None,
    ) -> UserCredential:
        """Upsert du jeton utilisateur; conserve le refresh token existant si aucun n'est fourni."""
        row = self._row(user_id)
        if not row:
            if not refresh_token:
                raise AuthError("Aucun refresh token reçu de Spotify")
            row = SpotifyToken(user_id=user_id)
        row.access_token = enc.encrypt_str(access_token)
        if refresh_token:
            row.refresh_token = enc.encrypt_str(refresh_token)
        ttl = ttl_seconds if ttl_seconds is not None else DEFAULT_TTL_SECONDS
        row.expires_at = (now or datetime.utcnow()) + timedelta(seconds=ttl)
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return self._to_credential(row)

    def get(self, user_id: str) -> Optional[UserCredential]:
        row = self._row(user_id)
        return self._to_credential(row) if row else None

    def delete(self, user_id: str) -> bool:
        row = self._row(user_id)
        if not row:
            return False
        self.db.delete(row)
        self.db.commit()
        return True

    def refresh(self, user_id: str, refresh_token: str) -> str:
        """Rafraîchir l'access token et persister le nouveau couple; AuthError si refusé."""
        token_data = self.client.refresh_access_token(refresh_token)
        access_token = token_data.get("access_token")
        if not access_token:
            raise AuthError("Réponse de refresh Spotify sans access_token")
        self.store(
            user_id,
            access_token,
            # Spotify peut faire tourner le refresh token
            token_data.get("refresh_token"),
            token_data.get("expires_in") or DEFAULT_TTL_SECONDS,
        )
        logging.info("🔄 Jeton Spotify rafraîchi pour %s", user_id)
        return access_token

    def get_valid_access_token(self, user_id: str, now: datetime | None = None) -> str:
        cred = self.get(user_id)
        if not cred:
            raise AuthError("Spotify non connecté. Authentifiez-vous d'abord.")
        if is_expired(cred, now):
            logging.info("Jeton Spotify expiré pour %s, refresh...", user_id)
            return self.refresh(user_id, cred.refresh_token)
        return cred.access_token
