"""Spotify Web API catalog client using the client credentials flow."""

import logging

from spotify_catalog.auth import AccessToken, Credentials, TokenManager
from spotify_catalog.client import SpotifyClient
from spotify_catalog.errors import (
    ApiAuthError,
    ApiError,
    ApiTransportError,
    AuthError,
    AuthTransportError,
    DecodeError,
    HttpStatusError,
    InvalidCredentialsError,
    InvalidRequestError,
    MalformedTokenResponseError,
    MissingCredentialsError,
    NotFoundError,
    RateLimitedError,
    SeedValidationError,
    SpotifyError,
)
from spotify_catalog.models import RecommendationsRequest
from spotify_catalog.urls import SpotifyRef, extract_spotify_id, parse_spotify_ref

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AccessToken",
    "ApiAuthError",
    "ApiError",
    "ApiTransportError",
    "AuthError",
    "AuthTransportError",
    "Credentials",
    "DecodeError",
    "HttpStatusError",
    "InvalidCredentialsError",
    "InvalidRequestError",
    "MalformedTokenResponseError",
    "MissingCredentialsError",
    "NotFoundError",
    "RateLimitedError",
    "RecommendationsRequest",
    "SeedValidationError",
    "SpotifyClient",
    "SpotifyError",
    "SpotifyRef",
    "TokenManager",
    "extract_spotify_id",
    "parse_spotify_ref",
]
