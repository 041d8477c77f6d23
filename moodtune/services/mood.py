from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class MoodProfile:
    name: str
    target_valence: float
    target_energy: float
    target_danceability: float
    seed_genres: str

    def as_params(self) -> list[tuple[str, str]]:
        # Ordre conservé dans la query string
        return [
            ("target_valence", str(self.target_valence)),
            ("target_energy", str(self.target_energy)),
            ("target_danceability", str(self.target_danceability)),
        ]


MOODS: Dict[str, MoodProfile] = {
    m.name: m
    for m in (
        MoodProfile("happy", 0.8, 0.7, 0.7, "pop,dance,indie"),
        MoodProfile("energetic", 0.7, 0.9, 0.8, "electronic,rock,workout"),
        MoodProfile("chill", 0.5, 0.3, 0.4, "ambient,acoustic,lo-fi"),
        MoodProfile("sad", 0.2, 0.3, 0.3, "indie,alternative,soul"),
        MoodProfile("romantic", 0.6, 0.4, 0.5, "r-n-b,soul,indie"),
    )
}


def get_mood_profile(label: Optional[str]) -> Optional[MoodProfile]:
    """Humeur inconnue -> None (aucun filtre d'humeur), jamais d'exception."""
    if not label or not isinstance(label, str):
        return None
    return MOODS.get(label.strip().lower())
