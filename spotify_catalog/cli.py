#!/usr/bin/env python3
"""Spotify catalog lookups from the command line.

CLI: uv run spotify-catalog album 4aawyAB9vmqN3uQ7FjRGTy
     uv run spotify-catalog artist 0TnOYISbd1XYRBk9myaseg
     uv run spotify-catalog track 11dFghVXANMlKmJXsNCbNl
     uv run spotify-catalog playlist 37i9dQZF1DXcBWIGoYBM5M
     uv run spotify-catalog track https://open.spotify.com/track/11dFghVXANMlKmJXsNCbNl
     uv run spotify-catalog playlist https://spotify.link/AbCdEf
     uv run spotify-catalog new-releases --limit 5
     uv run spotify-catalog genres
"""

import argparse
import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

from spotify_catalog.client import SpotifyClient
from spotify_catalog.errors import MissingCredentialsError, SpotifyError
from spotify_catalog.models import Album, Artist, Playlist, SimplifiedArtist, Track


def _format_duration(ms: int | None) -> str:
    """Format milliseconds as m:ss."""
    if ms is None:
        return "0:00"
    seconds = ms // 1000
    minutes = seconds // 60
    secs = seconds % 60
    return f"{minutes}:{secs:02d}"


def _artist_names(artists: list[SimplifiedArtist]) -> str:
    return ", ".join(artist.name for artist in artists) or "Unknown artist"


def format_album(album: Album) -> str:
    """One-line album summary."""
    year = (album.release_date or "????")[:4]
    return (
        f"'{album.name}' by {_artist_names(album.artists)}"
        f" ({year}, {album.total_tracks} tracks)"
    )


def format_artist(artist: Artist) -> str:
    """One-line artist summary."""
    parts = [artist.name]
    if artist.genres:
        parts.append(f"[{', '.join(artist.genres[:3])}]")
    if artist.followers is not None:
        parts.append(f"{artist.followers.total:,} followers")
    return " ".join(parts)


def format_track(track: Track) -> str:
    """One-line track summary."""
    return (
        f"'{track.name}' by {_artist_names(track.artists)}"
        f" from '{track.album.name}' [{_format_duration(track.duration_ms)}]"
    )


def format_playlist(playlist: Playlist) -> str:
    """One-line playlist summary."""
    owner = playlist.owner.display_name or playlist.owner.id
    return f"'{playlist.name}' by {owner} ({playlist.tracks.total} tracks)"


async def run(command: str, args: argparse.Namespace) -> str:
    """Run a subcommand and return its output."""
    async with SpotifyClient.from_env() as spotify:
        if command == "album":
            album_id = await spotify.resolve_id(args.id, "album")
            return format_album(await spotify.get_album(album_id))
        if command == "artist":
            artist_id = await spotify.resolve_id(args.id, "artist")
            return format_artist(await spotify.get_artist(artist_id))
        if command == "track":
            track_id = await spotify.resolve_id(args.id, "track")
            return format_track(await spotify.get_track(track_id, market=args.market))
        if command == "playlist":
            playlist_id = await spotify.resolve_id(args.id, "playlist")
            return format_playlist(await spotify.get_playlist(playlist_id))
        if command == "new-releases":
            releases = await spotify.get_new_releases(limit=args.limit)
            lines = [
                f"{i}. '{album.name}' by {_artist_names(album.artists)}"
                for i, album in enumerate(releases.albums.items, 1)
            ]
            return "\n".join(lines) or "No new releases."
        if command == "genres":
            seeds = await spotify.get_genre_seeds()
            return "\n".join(seeds.genres)
    raise ValueError(f"Unknown command '{command}'")


def main() -> None:
    """CLI entry point with subcommands."""
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Spotify catalog lookups",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    for name in ("album", "artist", "playlist"):
        sub = subparsers.add_parser(name, help=f"Look up {name} by Spotify ID or link")
        sub.add_argument("id", help=f"Spotify {name} ID, URI or link")

    track_parser = subparsers.add_parser("track", help="Look up track by Spotify ID or link")
    track_parser.add_argument("id", help="Spotify track ID, URI or link")
    track_parser.add_argument("--market", help="ISO 3166-1 alpha-2 country code")

    releases_parser = subparsers.add_parser("new-releases", help="List new album releases")
    releases_parser.add_argument("--limit", type=int, default=10, help="Number of albums (1-50)")

    subparsers.add_parser("genres", help="List recommendation genre seeds")

    args = parser.parse_args()

    debug = args.debug or os.getenv("DEBUG", "").lower() in ("1", "true", "yes")
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return

    try:
        print(asyncio.run(run(args.command, args)))
    except MissingCredentialsError:
        print("Error: SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET must be set in .env")
        print("\nTo set up Spotify:")
        print("1. Go to https://developer.spotify.com/dashboard")
        print("2. Create an app")
        print("3. Copy Client ID and Client Secret to .env")
        sys.exit(1)
    except SpotifyError as e:
        print(f"Spotify error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
