import pytest

from moodtune.errors import AuthError, UpstreamError, ValidationError
from moodtune.services.recommendations import RecommendationRequestBuilder, clamp_limit


def test_happy_mood_query(fake_client):
    query = RecommendationRequestBuilder(fake_client).build(
        "tok", mood="happy", limit=20
    )
    assert query.startswith("limit=20&")
    assert "target_valence=0.8&target_energy=0.7&target_danceability=0.7" in query
    assert "seed_tracks=top1,top2" in query
    assert query.endswith("seed_genres=pop,dance,indie")
    assert fake_client.calls == [("get_top_tracks", "tok", 5, "medium_term")]


def test_mood_without_top_tracks_uses_genres_only(fake_client):
    fake_client.top_tracks = []
    query = RecommendationRequestBuilder(fake_client).build("tok", mood="chill")
    assert "seed_tracks" not in query
    assert "seed_genres=ambient,acoustic,lo-fi" in query


def test_top_tracks_failure_falls_back_to_genres(fake_client):
    fake_client.top_tracks_error = UpstreamError("boom")
    query = RecommendationRequestBuilder(fake_client).build("tok", mood="sad")
    assert "seed_tracks" not in query
    assert "seed_genres=indie,alternative,soul" in query


def test_top_tracks_auth_failure_propagates(fake_client):
    fake_client.top_tracks_error = AuthError("refus")
    with pytest.raises(AuthError):
        RecommendationRequestBuilder(fake_client).build("tok", mood="sad")


def test_mood_takes_precedence_over_track(fake_client):
    query = RecommendationRequestBuilder(fake_client).build(
        "tok", mood="energetic", track_id="abc"
    )
    assert "abc" not in query
    assert "seed_genres=electronic,rock,workout" in query


def test_track_only_query(fake_client):
    query = RecommendationRequestBuilder(fake_client).build(
        "tok", track_id="abc", limit=10
    )
    assert query == "limit=10&seed_tracks=abc"
    assert fake_client.calls == []


def test_unknown_mood_falls_through_to_track(fake_client):
    query = RecommendationRequestBuilder(fake_client).build(
        "tok", mood="angry", track_id="abc"
    )
    assert query == "limit=20&seed_tracks=abc"
    assert fake_client.calls == []


@pytest.mark.parametrize("mood", [None, "", "angry"])
def test_missing_seed_raises_without_calls(fake_client, mood):
    with pytest.raises(ValidationError):
        RecommendationRequestBuilder(fake_client).build("tok", mood=mood)
    assert fake_client.calls == []


@pytest.mark.parametrize(
    "limit,expected", [(None, 20), (0, 1), (-5, 1), (50, 50), (500, 100)]
)
def test_clamp_limit(limit, expected):
    assert clamp_limit(limit) == expected
