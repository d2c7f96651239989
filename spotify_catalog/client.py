"""Spotify Web API catalog client."""

import logging
import os
from typing import TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from spotify_catalog.auth import TokenManager
from spotify_catalog.errors import (
    ApiAuthError,
    ApiTransportError,
    AuthError,
    DecodeError,
    HttpStatusError,
    InvalidRequestError,
    MissingCredentialsError,
    NotFoundError,
    RateLimitedError,
    SeedValidationError,
)
from spotify_catalog.models import (
    Album,
    Albums,
    Artist,
    Artists,
    GenreSeeds,
    NewReleases,
    Page,
    Playlist,
    Recommendations,
    RecommendationsRequest,
    SimplifiedAlbum,
    SimplifiedTrack,
    Track,
    Tracks,
)
from spotify_catalog.urls import extract_spotify_id, is_short_link

API_BASE = "https://api.spotify.com/v1"
DEFAULT_TIMEOUT = 10.0
MAX_SEEDS = 5

M = TypeVar("M", bound=BaseModel)

logger = logging.getLogger(__name__)


class SpotifyClient:
    """Spotify Web API client for catalog resources with automatic token renewal.

    Usage:
        async with SpotifyClient(client_id, client_secret) as spotify:
            album = await spotify.get_album("4aawyAB9vmqN3uQ7FjRGTy")
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        *,
        http: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(timeout=timeout)
        self.token_manager = TokenManager(client_id, client_secret, self._http)

    @classmethod
    def from_env(cls, **kwargs) -> "SpotifyClient":
        """Create a client from SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET."""
        client_id = os.environ.get("SPOTIFY_CLIENT_ID", "")
        client_secret = os.environ.get("SPOTIFY_CLIENT_SECRET", "")
        if not client_id or not client_secret:
            raise MissingCredentialsError(
                "SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET must be set"
            )
        return cls(client_id, client_secret, **kwargs)

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "SpotifyClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _get(
        self,
        path: str,
        model: type[M],
        resource_id: str,
        params: dict | None = None,
    ) -> M:
        """Make an authenticated GET request and decode the body into model."""
        try:
            token = await self.token_manager.ensure_valid_token()
        except AuthError as e:
            raise ApiAuthError(e) from e

        url = f"{API_BASE}{path}"
        try:
            response = await self._http.get(
                url,
                params=params,
                headers={"Authorization": f"Bearer {token.value}"},
            )
        except httpx.HTTPError as e:
            logger.warning("GET %s failed: %s", path, e)
            raise ApiTransportError(f"Request to {path} failed: {e}") from e

        if response.status_code == 404:
            raise NotFoundError(resource_id)

        if response.status_code == 429:
            retry_after = _retry_after(response)
            logger.warning("Rate limited on %s (retry after %s)", path, retry_after)
            raise RateLimitedError(retry_after)

        if not response.is_success:
            logger.warning("GET %s returned status %d", path, response.status_code)
            raise HttpStatusError(response.status_code, _error_message(response))

        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            raise DecodeError(f"Unexpected {model.__name__} response: {e}") from e

    # ─── Links ─────────────────────────────────────────────────────────────

    async def resolve_short_link(self, url: str) -> str:
        """Follow a spotify.link short link to its final open.spotify.com URL."""
        try:
            response = await self._http.get(url, follow_redirects=True)
        except httpx.HTTPError as e:
            logger.warning("Resolving %s failed: %s", url, e)
            raise ApiTransportError(f"Resolving {url} failed: {e}") from e

        final_url = str(response.url)
        logger.debug("Resolved %s to %s", url, final_url)
        return final_url

    async def resolve_id(self, value: str, kind: str) -> str:
        """Get a resource ID from a bare ID, spotify: URI, open.spotify.com URL or short link."""
        if is_short_link(value):
            value = await self.resolve_short_link(value)
        return extract_spotify_id(value, kind)

    # ─── Albums ────────────────────────────────────────────────────────────

    async def get_album(self, album_id: str) -> Album:
        """Get an album by Spotify ID."""
        return await self._get(f"/albums/{_segment(album_id)}", Album, album_id)

    async def get_several_albums(self, album_ids: list[str]) -> Albums:
        """Get up to 20 albums in one request."""
        ids = _join_ids(album_ids, 20)
        return await self._get("/albums", Albums, ids, params={"ids": ids})

    async def get_album_tracks(self, album_id: str) -> Page[SimplifiedTrack]:
        """Get the first page of an album's tracks."""
        return await self._get(
            f"/albums/{_segment(album_id)}/tracks", Page[SimplifiedTrack], album_id
        )

    async def get_new_releases(self, limit: int = 20, offset: int = 0) -> NewReleases:
        """Get newly released albums featured by Spotify."""
        params = {"limit": max(1, min(limit, 50)), "offset": max(0, offset)}
        return await self._get("/browse/new-releases", NewReleases, "new-releases", params)

    # ─── Artists ───────────────────────────────────────────────────────────

    async def get_artist(self, artist_id: str) -> Artist:
        """Get an artist by Spotify ID."""
        return await self._get(f"/artists/{_segment(artist_id)}", Artist, artist_id)

    async def get_several_artists(self, artist_ids: list[str]) -> Artists:
        """Get up to 50 artists in one request."""
        ids = _join_ids(artist_ids, 50)
        return await self._get("/artists", Artists, ids, params={"ids": ids})

    async def get_artist_albums(self, artist_id: str) -> Page[SimplifiedAlbum]:
        """Get the first page of an artist's albums."""
        return await self._get(
            f"/artists/{_segment(artist_id)}/albums", Page[SimplifiedAlbum], artist_id
        )

    async def get_artist_top_tracks(self, artist_id: str, market: str | None = None) -> Tracks:
        """Get an artist's top tracks, optionally for a market (ISO 3166-1 alpha-2)."""
        return await self._get(
            f"/artists/{_segment(artist_id)}/top-tracks",
            Tracks,
            artist_id,
            params={"market": market} if market else None,
        )

    async def get_related_artists(self, artist_id: str) -> Artists:
        """Get artists similar to the given artist."""
        return await self._get(
            f"/artists/{_segment(artist_id)}/related-artists", Artists, artist_id
        )

    # ─── Tracks ────────────────────────────────────────────────────────────

    async def get_track(self, track_id: str, market: str | None = None) -> Track:
        """Get a track by Spotify ID."""
        return await self._get(
            f"/tracks/{_segment(track_id)}",
            Track,
            track_id,
            params={"market": market} if market else None,
        )

    async def get_several_tracks(
        self, track_ids: list[str], market: str | None = None
    ) -> Tracks:
        """Get up to 50 tracks in one request."""
        ids = _join_ids(track_ids, 50)
        params = {"ids": ids}
        if market:
            params["market"] = market
        return await self._get("/tracks", Tracks, ids, params=params)

    # ─── Playlists ─────────────────────────────────────────────────────────

    async def get_playlist(self, playlist_id: str) -> Playlist:
        """Get a public playlist by Spotify ID."""
        return await self._get(f"/playlists/{_segment(playlist_id)}", Playlist, playlist_id)

    # ─── Recommendations ───────────────────────────────────────────────────

    async def get_genre_seeds(self) -> GenreSeeds:
        """Get genres available as recommendation seeds."""
        return await self._get(
            "/recommendations/available-genre-seeds", GenreSeeds, "available-genre-seeds"
        )

    async def get_recommendations(self, request: RecommendationsRequest) -> Recommendations:
        """Get track recommendations for up to five seeds."""
        if request.total_seeds == 0:
            raise SeedValidationError(
                "At least one seed (artist, genre, or track) is required."
            )
        if request.total_seeds > MAX_SEEDS:
            raise SeedValidationError(f"No more than {MAX_SEEDS} seeds in total are allowed.")

        return await self._get(
            "/recommendations", Recommendations, "recommendations", params=request.to_params()
        )


def _segment(resource_id: str) -> str:
    """Encode an ID as a single URL path segment."""
    if not resource_id:
        raise InvalidRequestError("Resource ID must not be empty.")
    return quote(resource_id, safe="")


def _join_ids(ids: list[str], limit: int) -> str:
    """Validate an ID list and join it for the `ids` query parameter."""
    if not ids:
        raise InvalidRequestError("Provide at least one ID.")
    if len(ids) > limit:
        raise InvalidRequestError(f"Maximum of {limit} IDs.")
    for resource_id in ids:
        if not resource_id or "," in resource_id:
            raise InvalidRequestError(f"Invalid ID: {resource_id!r}")
    return ",".join(ids)


def _retry_after(response: httpx.Response) -> int | None:
    """Parse the Retry-After header in seconds."""
    value = response.headers.get("Retry-After")
    try:
        return int(value) if value is not None else None
    except ValueError:
        return None


def _error_message(response: httpx.Response) -> str | None:
    """Extract the message from a Spotify error body, if any."""
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return f"{error['message']} (status {response.status_code})"
    return None
