#!/usr/bin/env python3
"""
Jetons Spotify par utilisateur (un seul enregistrement par user_id).
"""

from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, DateTime
from ..utils.database import Base


class SpotifyToken(Base):
    __tablename__ = "api_spotify_tokens"

    # Identifiant de l'appelant (sub du bearer), clé propriétaire
    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    # Jetons chiffrés (préfixe enc:), d'où la taille des colonnes
    access_token: Mapped[str] = mapped_column(String(2048))
    refresh_token: Mapped[str] = mapped_column(String(2048))
    expires_at: Mapped[datetime] = mapped_column(DateTime)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<SpotifyToken user_id={self.user_id}>"
