import os

# Environnement de test avant tout import de moodtune (lu à l'import)
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["JWT_AUDIENCE"] = ""
os.environ["ENCRYPTION_KEY"] = ""
os.environ["SPOTIFY_CLIENT_ID"] = "test-client-id"
os.environ["SPOTIFY_CLIENT_SECRET"] = "test-client-secret"

import time

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from moodtune.main import app
from moodtune.models import SpotifyToken  # noqa: F401
from moodtune.routes.spotify import get_spotify_client
from moodtune.services.spotify_client_service import SpotifyClient
from moodtune.utils.database import Base, get_db
from moodtune.utils.security import JWT_ALG, JWT_SECRET


def make_bearer_token(sub: str) -> str:
    """JWT HS256 tel qu'émis par le fournisseur d'identité externe."""
    now = int(time.time())
    payload = {"sub": sub, "iat": now, "exp": now + 3600}
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALG)


class FakeSpotifyClient(SpotifyClient):
    """Client Spotify en mémoire: enregistre les appels, aucune requête réseau."""

    def __init__(self):
        super().__init__(
            client_id="test-client-id",
            client_secret="test-client-secret",
            redirect_uri="http://localhost:8080/callback",
        )
        self.calls = []
        self.exchange_error = None
        self.token_response = {
            "access_token": "access-1",
            "refresh_token": "refresh-1",
            "expires_in": 3600,
        }
        self.refresh_response = {"access_token": "access-2", "expires_in": 3600}
        self.refresh_error = None
        self.profile = {
            "id": "spotify-user",
            "display_name": "Test User",
            "email": "test@example.com",
            "images": [],
            "country": "FR",
        }
        self.top_tracks = [{"id": "top1"}, {"id": "top2"}, {"id": "top3"}]
        self.top_tracks_error = None
        self.recommendations = {
            "tracks": [
                {
                    "id": "rec1",
                    "uri": "spotify:track:rec1",
                    "name": "Song",
                    "artists": [{"id": "a1", "name": "Artist"}],
                    "album": {
                        "name": "Album",
                        "images": [{"url": "https://i.scdn.co/x", "height": 640, "width": 640}],
                    },
                    "preview_url": None,
                    "external_urls": {"spotify": "https://open.spotify.com/track/rec1"},
                    "popularity": 50,
                }
            ]
        }
        self.recommendations_error = None
        self.search_results = {"tracks": {"items": [{"id": "s1"}]}}
        self.search_error = None

    def _names(self):
        return [c[0] for c in self.calls]

    def exchange_code(self, code, redirect_uri, code_verifier):
        self.calls.append(("exchange_code", code, redirect_uri, code_verifier))
        if self.exchange_error:
            raise self.exchange_error
        return dict(self.token_response)

    def refresh_access_token(self, refresh_token):
        self.calls.append(("refresh_access_token", refresh_token))
        if self.refresh_error:
            raise self.refresh_error
        return dict(self.refresh_response)

    def get_profile(self, access_token):
        self.calls.append(("get_profile", access_token))
        return dict(self.profile)

    def get_top_tracks(self, access_token, limit=5, time_range="medium_term"):
        self.calls.append(("get_top_tracks", access_token, limit, time_range))
        if self.top_tracks_error:
            raise self.top_tracks_error
        return list(self.top_tracks)

    def get_recommendations(self, access_token, query):
        self.calls.append(("get_recommendations", access_token, query))
        if self.recommendations_error:
            raise self.recommendations_error
        return self.recommendations

    def search(self, access_token, query, type, limit):
        self.calls.append(("search", access_token, query, type, limit))
        if self.search_error:
            raise self.search_error
        return self.search_results


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def db(engine):
    Session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    session = Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def fake_client():
    return FakeSpotifyClient()


@pytest.fixture
def client(db, fake_client):
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_spotify_client] = lambda: fake_client
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {make_bearer_token('user-1')}"}




@pytest.fixture
def headers_for():
    def _headers(sub: str) -> dict:
        return {"Authorization": f"Bearer {make_bearer_token(sub)}"}

    return _headers
