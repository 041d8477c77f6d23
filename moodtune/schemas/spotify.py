from datetime import datetime
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class AuthUrlOut(BaseModel):
    url: str
    state: str


class ExchangeIn(BaseModel):
    code: str | None = None
    redirect_uri: str | None = Field(
        default=None, validation_alias=AliasChoices("redirect_uri", "redirectUri")
    )
    code_verifier: str | None = Field(
        default=None, validation_alias=AliasChoices("code_verifier", "codeVerifier")
    )
    # Alternative au verifier: state émis par /auth/url (verifier conservé côté serveur)
    state: str | None = None


class SpotifyProfileOut(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    display_name: str | None = None
    email: str | None = None
    images: list[dict] = Field(default_factory=list)


class ExchangeOut(BaseModel):
    success: bool = True
    profile: SpotifyProfileOut


class AuthStatusOut(BaseModel):
    connected: bool
    expires_at: datetime | None = None


class RecommendationsIn(BaseModel):
    mood: str | None = None
    track_id: str | None = Field(
        default=None, validation_alias=AliasChoices("trackId", "track_id")
    )
    limit: int = 20


class SearchIn(BaseModel):
    query: str | None = None
    type: str = "track"
    limit: int = 10
