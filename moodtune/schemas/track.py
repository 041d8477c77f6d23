from pydantic import BaseModel, ConfigDict, Field


class ImageOut(BaseModel):
    model_config = ConfigDict(extra="ignore")

    url: str
    height: int | None = None
    width: int | None = None


class ArtistOut(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    name: str


class AlbumOut(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    images: list[ImageOut] = Field(default_factory=list)


class TrackOut(BaseModel):
    """Vue lecture seule d'un titre Spotify."""

    model_config = ConfigDict(extra="ignore")

    id: str
    # URI de lecture (spotify:track:...) utilisée par le lecteur intégré
    uri: str | None = None
    name: str
    artists: list[ArtistOut] = Field(default_factory=list)
    album: AlbumOut
    preview_url: str | None = None
    external_urls: dict[str, str] = Field(default_factory=dict)


class RecommendationsOut(BaseModel):
    tracks: list[TrackOut] = Field(default_factory=list)
