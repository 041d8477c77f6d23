import os
import time
import threading
from typing import Dict, Optional, Tuple

PKCE_TTL_SECONDS = int(os.getenv("PKCE_TTL_SECONDS", "600"))


class PendingVerifierStore:
    """Stockage court des code_verifier PKCE, indexés par le paramètre OAuth `state`.

    Usage unique: `pop` supprime l'entrée dès la lecture, que l'échange réussisse ou non.
    """

    def __init__(self, ttl_seconds: int = PKCE_TTL_SECONDS) -> None:
        self.ttl_seconds = ttl_seconds
        # state -> (user_id, verifier, expire_at)
        self._items: Dict[str, Tuple[str, str, float]] = {}
        self._lock = threading.Lock()

    def put(self, state: str, user_id: str, verifier: str) -> None:
        now = time.time()
        with self._lock:
            self._purge(now)
            self._items[state] = (user_id, verifier, now + self.ttl_seconds)

    def pop(self, state: str, user_id: str) -> Optional[str]:
        now = time.time()
        with self._lock:
            item = self._items.pop(state, None)
            self._purge(now)
        if not item:
            return None
        owner, verifier, expire_at = item
        # Un state émis pour un autre utilisateur ou périmé ne vaut rien
        if owner != user_id or now >= expire_at:
            return None
        return verifier

    def _purge(self, now: float) -> None:
        expired = [k for k, (_, _, exp) in self._items.items() if now >= exp]
        for k in expired:
            del self._items[k]


class AppState:
    def __init__(self) -> None:
        self.pending_verifiers = PendingVerifierStore()

    async def start(self):
        return None

    async def stop(self):
        self.pending_verifiers = PendingVerifierStore()
        return None


# Singleton global pour un accès simple depuis les routes
_STATE_SINGLETON: Optional[AppState] = None


def get_state() -> AppState:
    global _STATE_SINGLETON
    if _STATE_SINGLETON is None:
        _STATE_SINGLETON = AppState()
    return _STATE_SINGLETON
