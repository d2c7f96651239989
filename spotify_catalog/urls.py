"""Spotify link and URI parsing."""

import re
from dataclasses import dataclass

import httpx

from spotify_catalog.errors import InvalidRequestError

RESOURCE_KINDS = ("album", "artist", "playlist", "track")
SHORT_LINK_HOSTS = ("spotify.link", "spoti.fi")

_KINDS = "|".join(RESOURCE_KINDS)
# open.spotify.com/track/ID, /intl-de/track/ID, /embed/track/ID, with optional ?si=...
_PATH_PATTERN = re.compile(rf"^/(?:intl-[a-zA-Z-]+/)?(?:embed/)?({_KINDS})/([A-Za-z0-9]+)/?$")
_URI_PATTERN = re.compile(rf"^spotify:({_KINDS}):([A-Za-z0-9]+)$")
_ID_PATTERN = re.compile(r"^[A-Za-z0-9]+$")


@dataclass(frozen=True)
class SpotifyRef:
    """Resource kind and ID extracted from a link or URI."""

    kind: str
    id: str


def is_short_link(value: str) -> bool:
    """Check if value is a spotify.link style short link."""
    value = value.strip()
    if not value.startswith(("http://", "https://")):
        return False
    return httpx.URL(value).host in SHORT_LINK_HOSTS


def parse_spotify_ref(value: str) -> SpotifyRef:
    """Parse an open.spotify.com URL or spotify: URI into kind and ID.

    Raises InvalidRequestError for anything else, including short links,
    which must be resolved first.
    """
    value = value.strip()

    match = _URI_PATTERN.match(value)
    if match:
        return SpotifyRef(kind=match.group(1), id=match.group(2))

    if value.startswith(("http://", "https://")):
        url = httpx.URL(value)
        if url.host == "open.spotify.com":
            match = _PATH_PATTERN.match(url.path)
            if match:
                return SpotifyRef(kind=match.group(1), id=match.group(2))

    raise InvalidRequestError(f"Not a Spotify link or URI: {value!r}")


def extract_spotify_id(value: str, kind: str) -> str:
    """Get the ID of a resource of the given kind from a link, URI or bare ID."""
    value = value.strip()
    if _ID_PATTERN.match(value):
        return value

    ref = parse_spotify_ref(value)
    if ref.kind != kind:
        raise InvalidRequestError(f"Link is for {ref.kind}, expected {kind}")
    return ref.id
