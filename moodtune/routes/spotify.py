from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from ..utils.database import get_db
from ..utils.auth_dep import get_current_user_id
from ..controllers.spotify_controller import SpotifyController
from ..services.spotify_client_service import SpotifyClient
from ..schemas.spotify import (
    AuthStatusOut,
    AuthUrlOut,
    ExchangeIn,
    ExchangeOut,
    RecommendationsIn,
    SearchIn,
)
from ..schemas.track import RecommendationsOut


router = APIRouter()


def get_spotify_client() -> SpotifyClient:
    return SpotifyClient()


def get_controller(
    client: SpotifyClient = Depends(get_spotify_client),
) -> SpotifyController:
    return SpotifyController(client)


@router.get("/auth/url", response_model=AuthUrlOut)
def get_spotify_auth_url(
    redirect_uri: str | None = None,
    uid: str = Depends(get_current_user_id),
    ctrl: SpotifyController = Depends(get_controller),
):
    return ctrl.auth_url(uid, redirect_uri)


@router.post("/auth/exchange", response_model=ExchangeOut)
def spotify_auth_exchange(
    payload: ExchangeIn,
    uid: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    ctrl: SpotifyController = Depends(get_controller),
):
    return ctrl.exchange(
        db,
        uid,
        payload.code,
        redirect_uri=payload.redirect_uri,
        code_verifier=payload.code_verifier,
        state=payload.state,
    )


@router.get("/auth/status", response_model=AuthStatusOut)
def spotify_auth_status(
    uid: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    ctrl: SpotifyController = Depends(get_controller),
):
    return ctrl.status(db, uid)


@router.post("/logout")
def spotify_logout(
    uid: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    ctrl: SpotifyController = Depends(get_controller),
):
    ctrl.disconnect(db, uid)
    return {"status": "disconnected"}


@router.post("/recommendations", response_model=RecommendationsOut)
def spotify_recommendations(
    payload: RecommendationsIn,
    uid: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    ctrl: SpotifyController = Depends(get_controller),
):
    tracks = ctrl.recommendations(
        db, uid, mood=payload.mood, track_id=payload.track_id, limit=payload.limit
    )
    return {"tracks": tracks}


@router.post("/search")
def spotify_search(
    payload: SearchIn,
    uid: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    ctrl: SpotifyController = Depends(get_controller),
):
    # Payload Spotify brut
    return ctrl.search(db, uid, payload.query, payload.type, payload.limit)
