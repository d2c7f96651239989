"""Spotify Web API response models.

Each model mirrors the subset of Spotify's JSON schema this library exposes.
Unknown fields are ignored; missing required fields fail validation.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")

TUNABLE_ATTRIBUTES = (
    "acousticness",
    "danceability",
    "duration_ms",
    "energy",
    "instrumentalness",
    "key",
    "liveness",
    "loudness",
    "mode",
    "popularity",
    "speechiness",
    "tempo",
    "time_signature",
    "valence",
)
TUNABLE_PREFIXES = ("min_", "max_", "target_")


class SpotifyModel(BaseModel):
    """Read-only record decoded from a Spotify response."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


# ─── Auth ──────────────────────────────────────────────────────────────────


class TokenResponse(SpotifyModel):
    """Body of a successful client credentials token request."""

    access_token: str = Field(min_length=1)
    token_type: str = "Bearer"
    expires_in: int = Field(gt=0)


# ─── Shared ────────────────────────────────────────────────────────────────


class ExternalUrls(SpotifyModel):
    spotify: str | None = None


class Image(SpotifyModel):
    url: str
    height: int | None = None
    width: int | None = None


class Followers(SpotifyModel):
    href: str | None = None
    total: int = 0


class Copyright(SpotifyModel):
    text: str
    type: str


class Page(SpotifyModel, Generic[T]):
    """Offset-based paging object. Following `next` is left to the caller."""

    href: str
    items: list[T]
    limit: int
    next: str | None = None
    offset: int
    previous: str | None = None
    total: int


class User(SpotifyModel):
    id: str
    display_name: str | None = None
    external_urls: ExternalUrls = ExternalUrls()
    type: str = "user"
    uri: str | None = None


# ─── Artists ───────────────────────────────────────────────────────────────


class SimplifiedArtist(SpotifyModel):
    # None on local files
    id: str | None = None
    name: str
    href: str | None = None
    uri: str | None = None
    external_urls: ExternalUrls = ExternalUrls()


class Artist(SpotifyModel):
    id: str
    name: str
    type: str = "artist"
    uri: str
    href: str | None = None
    external_urls: ExternalUrls
    images: list[Image] = []
    genres: list[str] = []
    followers: Followers | None = None
    popularity: int | None = None


class Artists(SpotifyModel):
    """Several artists. Unknown ids come back as null entries."""

    artists: list[Artist | None]


# ─── Albums and tracks ─────────────────────────────────────────────────────


class SimplifiedAlbum(SpotifyModel):
    """Album summary. Local files carry one with only a name."""

    id: str | None = None
    name: str
    album_type: str | None = None
    total_tracks: int | None = None
    release_date: str | None = None
    release_date_precision: str | None = None
    type: str = "album"
    uri: str | None = None
    href: str | None = None
    external_urls: ExternalUrls = ExternalUrls()
    images: list[Image] = []
    artists: list[SimplifiedArtist] = []
    available_markets: list[str] = []


class SimplifiedTrack(SpotifyModel):
    id: str
    name: str
    artists: list[SimplifiedArtist]
    duration_ms: int
    disc_number: int = 1
    track_number: int = 1
    explicit: bool = False
    preview_url: str | None = None
    href: str | None = None
    uri: str | None = None
    external_urls: ExternalUrls = ExternalUrls()


class Track(SpotifyModel):
    """Full track. ``id`` is None when ``is_local`` is set."""

    id: str | None = None
    name: str
    album: SimplifiedAlbum
    artists: list[SimplifiedArtist]
    duration_ms: int
    disc_number: int = 1
    track_number: int = 1
    explicit: bool = False
    is_local: bool = False
    popularity: int | None = None
    preview_url: str | None = None
    href: str | None = None
    uri: str | None = None
    external_urls: ExternalUrls = ExternalUrls()


class Tracks(SpotifyModel):
    """Several tracks or an artist's top tracks."""

    tracks: list[Track | None]


class Album(SimplifiedAlbum):
    tracks: Page[SimplifiedTrack]
    copyrights: list[Copyright] = []
    genres: list[str] = []
    label: str | None = None
    popularity: int | None = None


class Albums(SpotifyModel):
    """Several albums. Unknown ids come back as null entries."""

    albums: list[Album | None]


class NewReleases(SpotifyModel):
    albums: Page[SimplifiedAlbum]


# ─── Playlists ─────────────────────────────────────────────────────────────


class PlaylistTrackItem(SpotifyModel):
    added_at: str | None = None
    track: Track | None = None


class Playlist(SpotifyModel):
    id: str
    name: str
    description: str | None = None
    owner: User
    tracks: Page[PlaylistTrackItem]
    public: bool | None = None
    collaborative: bool = False
    snapshot_id: str | None = None
    uri: str | None = None
    href: str | None = None
    external_urls: ExternalUrls
    images: list[Image] | None = None
    followers: Followers | None = None


# ─── Recommendations ───────────────────────────────────────────────────────


class GenreSeeds(SpotifyModel):
    genres: list[str]


class RecommendationSeed(SpotifyModel):
    id: str
    type: str
    href: str | None = None
    after_filtering_size: int = Field(alias="afterFilteringSize")
    after_relinking_size: int = Field(alias="afterRelinkingSize")
    initial_pool_size: int = Field(alias="initialPoolSize")


class Recommendations(SpotifyModel):
    seeds: list[RecommendationSeed]
    tracks: list[Track]


class RecommendationsRequest(BaseModel):
    """Query for GET /recommendations.

    Seeds are Spotify IDs (artists, tracks) or genre names. Up to five seeds
    may be combined. Tunables use Spotify's parameter names, e.g.
    ``{"target_energy": 0.8, "max_tempo": 120}``.
    """

    seed_artists: list[str] = []
    seed_genres: list[str] = []
    seed_tracks: list[str] = []
    limit: int | None = Field(default=None, ge=1, le=100)
    market: str | None = None
    tunables: dict[str, float] = {}

    @field_validator("tunables")
    @classmethod
    def check_tunables(cls, value: dict[str, float]) -> dict[str, float]:
        for name in value:
            prefix, _, attribute = name.partition("_")
            if f"{prefix}_" not in TUNABLE_PREFIXES or attribute not in TUNABLE_ATTRIBUTES:
                raise ValueError(f"Unknown tunable attribute '{name}'")
        return value

    @property
    def total_seeds(self) -> int:
        return len(self.seed_artists) + len(self.seed_genres) + len(self.seed_tracks)

    def to_params(self) -> dict[str, str | int | float]:
        """Build query parameters, comma-joining lists and skipping unset values."""
        params: dict[str, str | int | float] = {}
        for key in ("seed_artists", "seed_genres", "seed_tracks"):
            values = getattr(self, key)
            if values:
                params[key] = ",".join(values)
        if self.limit is not None:
            params["limit"] = self.limit
        if self.market:
            params["market"] = self.market
        for name, value in self.tunables.items():
            params[name] = int(value) if float(value).is_integer() else value
        return params
