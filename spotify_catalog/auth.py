"""Spotify client credentials token management."""

import asyncio
import logging
import time
from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from spotify_catalog.errors import (
    AuthTransportError,
    InvalidCredentialsError,
    MalformedTokenResponseError,
)
from spotify_catalog.models import TokenResponse

TOKEN_URL = "https://accounts.spotify.com/api/token"
EXPIRY_MARGIN = 60

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credentials:
    """Spotify application client ID and secret."""

    client_id: str
    client_secret: str

    def __repr__(self) -> str:
        return f"Credentials(client_id={self.client_id!r}, client_secret='***')"


@dataclass(frozen=True)
class AccessToken:
    """Bearer token with absolute expiry."""

    value: str
    expires_at: float

    @property
    def valid(self) -> bool:
        """Check if the token can still be used."""
        return time.time() < self.expires_at

    @property
    def expires_in(self) -> float:
        """Seconds until expiry, negative once expired."""
        return self.expires_at - time.time()

    def __repr__(self) -> str:
        return f"AccessToken(value='***', expires_at={self.expires_at})"


class TokenManager:
    """Fetches and renews an app access token via the client credentials flow.

    Concurrent callers that find the token missing or expired share a single
    renewal request. The renewal runs as its own task, so a caller giving up
    does not cancel it and its result is still cached for later callers.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        http: httpx.AsyncClient,
        margin: float = EXPIRY_MARGIN,
    ) -> None:
        self.credentials = Credentials(client_id, client_secret)
        self.margin = margin
        self._http = http
        self._token: AccessToken | None = None
        self._renewal: asyncio.Task[AccessToken] | None = None

    @property
    def current_token(self) -> AccessToken | None:
        """Cached token, valid or not."""
        return self._token

    def invalidate(self) -> None:
        """Drop the cached token so the next call fetches a new one."""
        self._token = None

    async def ensure_valid_token(self) -> AccessToken:
        """Get a valid access token, renewing it if needed."""
        token = self._token
        if token is not None and token.valid:
            return token

        if self._renewal is None:
            logger.debug("Access token missing or expired, requesting a new one")
            self._renewal = asyncio.create_task(self._request_token())
            self._renewal.add_done_callback(self._renewal_done)

        return await asyncio.shield(self._renewal)

    def _renewal_done(self, task: asyncio.Task[AccessToken]) -> None:
        self._renewal = None
        # Marks a failure as retrieved when every waiter was cancelled.
        if not task.cancelled():
            task.exception()

    async def _request_token(self) -> AccessToken:
        """Request a new access token from the Spotify Accounts service."""
        requested_at = time.time()
        try:
            response = await self._http.post(
                TOKEN_URL,
                data={"grant_type": "client_credentials"},
                auth=(self.credentials.client_id, self.credentials.client_secret),
            )
        except httpx.HTTPError as e:
            logger.warning("Token request failed: %s", e)
            raise AuthTransportError(f"Token request failed: {e}") from e

        if response.status_code in (400, 401, 403):
            logger.warning("Token request rejected with status %d", response.status_code)
            raise InvalidCredentialsError(_error_message(response))

        if not response.is_success:
            logger.warning("Token endpoint returned status %d", response.status_code)
            raise AuthTransportError(
                f"Token endpoint returned status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = TokenResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise MalformedTokenResponseError(f"Unexpected token response: {e}") from e

        # Short-lived tokens keep at least half their lifetime.
        margin = min(self.margin, data.expires_in / 2)
        token = AccessToken(
            value=data.access_token,
            expires_at=requested_at + data.expires_in - margin,
        )
        self._token = token
        logger.debug("Obtained access token valid for %ds", data.expires_in)
        return token


def _error_message(response: httpx.Response) -> str:
    """Extract Spotify's error description from a token endpoint response."""
    try:
        data = response.json()
    except ValueError:
        return f"Invalid client credentials (status {response.status_code})"

    if isinstance(data, dict):
        description = data.get("error_description") or data.get("error")
        if description:
            return f"Invalid client credentials: {description}"
    return f"Invalid client credentials (status {response.status_code})"
