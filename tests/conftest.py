"""Pytest configuration - load .env and provide a fake Spotify backend."""

import asyncio
import time

import httpx
import pytest
from dotenv import load_dotenv

from spotify_catalog.client import SpotifyClient

# Load .env file for live API credentials
load_dotenv()

CLIENT_ID = "test-client-id"
CLIENT_SECRET = "test-client-secret"


class FakeSpotify:
    """Stands in for accounts.spotify.com and api.spotify.com."""

    def __init__(self) -> None:
        self.token_requests: list[httpx.Request] = []
        self.api_requests: list[httpx.Request] = []
        self.events: list[str] = []
        self.token_status = 200
        self.token_body: dict | str = {
            "access_token": "abc",
            "token_type": "Bearer",
            "expires_in": 3600,
        }
        self.token_delay = 0.0
        self.token_error: Exception | None = None
        self.api_error: Exception | None = None
        self.routes: dict[str, httpx.Response] = {}
        self.redirects: dict[str, str] = {}
        self.web_requests: list[httpx.Request] = []

    def add(
        self,
        path: str,
        body: dict | str | None = None,
        status: int = 200,
        headers: dict | None = None,
    ) -> None:
        """Register a response for an API path like /v1/albums/123."""
        if isinstance(body, str):
            self.routes[path] = httpx.Response(status, text=body, headers=headers)
        else:
            self.routes[path] = httpx.Response(status, json=body, headers=headers)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.host == "accounts.spotify.com":
            self.token_requests.append(request)
            self.events.append("token")
            if self.token_delay:
                await asyncio.sleep(self.token_delay)
            if self.token_error:
                raise self.token_error
            if isinstance(self.token_body, str):
                return httpx.Response(self.token_status, text=self.token_body)
            return httpx.Response(self.token_status, json=self.token_body)

        if request.url.host != "api.spotify.com":
            self.web_requests.append(request)
            self.events.append(f"GET {request.url}")
            location = self.redirects.get(str(request.url))
            if location:
                return httpx.Response(307, headers={"Location": location})
            return httpx.Response(200, text="<html></html>")

        self.api_requests.append(request)
        self.events.append(f"GET {request.url.path}")
        if self.api_error:
            raise self.api_error
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"error": {"status": 404, "message": "Non existing id"}})
        return httpx.Response(route.status_code, content=route.content, headers=route.headers)


class Clock:
    """Replacement for time.time that only moves when told to."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock(monkeypatch):
    fake = Clock()
    monkeypatch.setattr(time, "time", fake)
    return fake


@pytest.fixture
def fake_spotify():
    return FakeSpotify()


@pytest.fixture
async def http(fake_spotify):
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_spotify.handler)) as client:
        yield client


@pytest.fixture
def spotify(http):
    return SpotifyClient(CLIENT_ID, CLIENT_SECRET, http=http)


# ─── Sample payloads ───────────────────────────────────────────────────────


def _external(kind: str, id_: str) -> dict:
    return {"spotify": f"https://open.spotify.com/{kind}/{id_}"}


SIMPLE_ARTIST = {
    "external_urls": _external("artist", "2BTZIqw0ntH9MvilQ3ewNY"),
    "href": "https://api.spotify.com/v1/artists/2BTZIqw0ntH9MvilQ3ewNY",
    "id": "2BTZIqw0ntH9MvilQ3ewNY",
    "name": "Cyndi Lauper",
    "type": "artist",
    "uri": "spotify:artist:2BTZIqw0ntH9MvilQ3ewNY",
}

SIMPLE_TRACK = {
    "artists": [SIMPLE_ARTIST],
    "disc_number": 1,
    "duration_ms": 238666,
    "explicit": False,
    "external_urls": _external("track", "3f9zqUnrnIq0LANhmnaF0V"),
    "href": "https://api.spotify.com/v1/tracks/3f9zqUnrnIq0LANhmnaF0V",
    "id": "3f9zqUnrnIq0LANhmnaF0V",
    "name": "Money Changes Everything",
    "preview_url": None,
    "track_number": 1,
    "type": "track",
    "uri": "spotify:track:3f9zqUnrnIq0LANhmnaF0V",
}

SIMPLE_ALBUM = {
    "album_type": "album",
    "artists": [SIMPLE_ARTIST],
    "available_markets": ["US", "GB"],
    "external_urls": _external("album", "0sNOF9WDwhWunNAHPD3Baj"),
    "href": "https://api.spotify.com/v1/albums/0sNOF9WDwhWunNAHPD3Baj",
    "id": "0sNOF9WDwhWunNAHPD3Baj",
    "images": [
        {"height": 640, "url": "https://i.scdn.co/image/ab67616d0000b273", "width": 640},
    ],
    "name": "She's So Unusual",
    "release_date": "1983",
    "release_date_precision": "year",
    "total_tracks": 13,
    "type": "album",
    "uri": "spotify:album:0sNOF9WDwhWunNAHPD3Baj",
}

ALBUM = {
    **SIMPLE_ALBUM,
    "copyrights": [{"text": "(P) 1983 Sony Music Entertainment Inc.", "type": "P"}],
    "external_ids": {"upc": "5099749994324"},
    "genres": [],
    "label": "Epic",
    "popularity": 64,
    "tracks": {
        "href": "https://api.spotify.com/v1/albums/0sNOF9WDwhWunNAHPD3Baj/tracks?offset=0&limit=50",
        "items": [SIMPLE_TRACK],
        "limit": 50,
        "next": None,
        "offset": 0,
        "previous": None,
        "total": 1,
    },
}

ARTIST = {
    **SIMPLE_ARTIST,
    "followers": {"href": None, "total": 2315410},
    "genres": ["dance pop", "new wave pop"],
    "images": [{"height": 640, "url": "https://i.scdn.co/image/ab6761610000e5eb", "width": 640}],
    "popularity": 72,
}

TRACK = {
    **SIMPLE_TRACK,
    "album": SIMPLE_ALBUM,
    "external_ids": {"isrc": "USSM18300073"},
    "is_local": False,
    "popularity": 55,
}

LOCAL_TRACK = {
    "album": {
        "album_type": None,
        "artists": [],
        "available_markets": [],
        "external_urls": {},
        "href": None,
        "id": None,
        "images": [],
        "name": "Basement Tapes",
        "release_date": None,
        "release_date_precision": None,
        "type": "album",
        "uri": None,
    },
    "artists": [
        {
            "external_urls": {},
            "href": None,
            "id": None,
            "name": "The Neighbours",
            "type": "artist",
            "uri": None,
        }
    ],
    "available_markets": [],
    "disc_number": 0,
    "duration_ms": 201000,
    "explicit": False,
    "external_ids": {},
    "external_urls": {},
    "href": None,
    "id": None,
    "is_local": True,
    "name": "Garage Demo",
    "popularity": 0,
    "preview_url": None,
    "track_number": 0,
    "type": "track",
    "uri": "spotify:local:The+Neighbours:Basement+Tapes:Garage+Demo:201",
}

PLAYLIST = {
    "collaborative": False,
    "description": "The hottest 50.",
    "external_urls": _external("playlist", "37i9dQZF1DXcBWIGoYBM5M"),
    "followers": {"href": None, "total": 34000000},
    "href": "https://api.spotify.com/v1/playlists/37i9dQZF1DXcBWIGoYBM5M",
    "id": "37i9dQZF1DXcBWIGoYBM5M",
    "images": [{"height": None, "url": "https://i.scdn.co/image/ab67706f00000002", "width": None}],
    "name": "Today's Top Hits",
    "owner": {
        "display_name": "Spotify",
        "external_urls": _external("user", "spotify"),
        "id": "spotify",
        "type": "user",
        "uri": "spotify:user:spotify",
    },
    "public": True,
    "snapshot_id": "MTcwMDAwMDAwMCwwMDAwMDAwMA==",
    "tracks": {
        "href": "https://api.spotify.com/v1/playlists/37i9dQZF1DXcBWIGoYBM5M/tracks",
        "items": [
            {"added_at": "2024-01-05T05:00:00Z", "track": TRACK},
            {"added_at": "2024-01-05T05:00:00Z", "track": None},
            {"added_at": "2024-01-06T05:00:00Z", "track": LOCAL_TRACK},
        ],
        "limit": 100,
        "next": None,
        "offset": 0,
        "previous": None,
        "total": 3,
    },
    "type": "playlist",
    "uri": "spotify:playlist:37i9dQZF1DXcBWIGoYBM5M",
}

RECOMMENDATIONS = {
    "seeds": [
        {
            "afterFilteringSize": 250,
            "afterRelinkingSize": 250,
            "href": None,
            "id": "new-wave",
            "initialPoolSize": 250,
            "type": "GENRE",
        }
    ],
    "tracks": [TRACK],
}
