import logging
from typing import Optional
from urllib.parse import urlencode

from ..errors import AuthError, UpstreamError, ValidationError
from .mood import get_mood_profile
from .spotify_client_service import SpotifyClient

DEFAULT_LIMIT = 20
MIN_LIMIT = 1
MAX_LIMIT = 100
# Nombre de titres du top utilisateur utilisés comme seeds
TOP_TRACK_SEEDS = 2


def clamp_limit(limit: Optional[int]) -> int:
    if limit is None:
        return DEFAULT_LIMIT
    return max(MIN_LIMIT, min(MAX_LIMIT, int(limit)))


class RecommendationRequestBuilder:
    def __init__(self, client: SpotifyClient):
        self.client = client

    def build(
        self,
        access_token: str,
        mood: Optional[str] = None,
        track_id: Optional[str] = None,
        limit: Optional[int] = DEFAULT_LIMIT,
    ) -> str:
        """Construire la query string de /recommendations.

        Une seule stratégie de seed par appel: humeur reconnue (top titres + genres),
        sinon trackId seul. Aucune des deux -> ValidationError, sans appel sortant.
        """
        track_id = (track_id or "").strip() or None
        if not (mood or "").strip() and not track_id:
            raise ValidationError("mood ou trackId requis")

        params: list[tuple[str, str]] = [("limit", str(clamp_limit(limit)))]
        profile = get_mood_profile(mood)

        if profile:
            params.extend(profile.as_params())
            seeds = self._top_track_seeds(access_token)
            if seeds:
                params.append(("seed_tracks", ",".join(seeds)))
            params.append(("seed_genres", profile.seed_genres))
        elif track_id:
            if mood:
                logging.info("Humeur inconnue '%s', seed sur le titre", mood)
            params.append(("seed_tracks", track_id))
        else:
            raise ValidationError("mood ou trackId requis")

        # Virgules laissées telles quelles (seed_genres=pop,dance,indie)
        return urlencode(params, safe=",")

    def _top_track_seeds(self, access_token: str) -> list[str]:
        try:
            items = self.client.get_top_tracks(
                access_token, limit=5, time_range="medium_term"
            )
        except AuthError:
            raise
        except UpstreamError as e:
            # Les genres de l'humeur suffisent comme seeds
            logging.warning("Top titres indisponibles: %s", e.message)
            return []
        seeds = [t["id"] for t in items if t and t.get("id")][:TOP_TRACK_SEEDS]
        logging.info("Top titres récupérés: %d, seeds: %d", len(items), len(seeds))
        return seeds
