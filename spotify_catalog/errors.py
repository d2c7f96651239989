"""Spotify catalog client exceptions."""


class SpotifyError(Exception):
    """Base exception for all Spotify errors."""

    pass


class MissingCredentialsError(SpotifyError):
    """Raised when client credentials are not configured."""

    pass


# ─── Token endpoint ────────────────────────────────────────────────────────


class AuthError(SpotifyError):
    """Raised when an access token cannot be obtained."""

    pass


class InvalidCredentialsError(AuthError):
    """Raised when Spotify rejects the client ID or secret."""

    pass


class AuthTransportError(AuthError):
    """Raised when the token endpoint is unreachable or answers with an error status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedTokenResponseError(AuthError):
    """Raised when the token endpoint body is not a valid token response."""

    pass


# ─── Web API ───────────────────────────────────────────────────────────────


class ApiError(SpotifyError):
    """Raised when a Web API request fails."""

    pass


class ApiAuthError(ApiError):
    """Raised when a request could not be authenticated."""

    def __init__(self, auth_error: AuthError) -> None:
        super().__init__(f"Authentication failed: {auth_error}")
        self.auth_error = auth_error


class NotFoundError(ApiError):
    """Raised when the requested resource does not exist."""

    def __init__(self, resource_id: str) -> None:
        super().__init__(f"Resource not found: {resource_id}")
        self.resource_id = resource_id


class RateLimitedError(ApiError):
    """Raised on HTTP 429. Requests are never retried automatically."""

    def __init__(self, retry_after: int | None = None) -> None:
        message = "Rate limited by Spotify"
        if retry_after is not None:
            message += f" (retry after {retry_after}s)"
        super().__init__(message)
        self.retry_after = retry_after


class DecodeError(ApiError):
    """Raised when a response body does not match the expected model."""

    pass


class HttpStatusError(ApiError):
    """Raised for any other non-2xx response."""

    def __init__(self, status_code: int, message: str | None = None) -> None:
        super().__init__(message or f"Request failed with status {status_code}")
        self.status_code = status_code


class ApiTransportError(ApiError):
    """Raised when the Web API is unreachable."""

    pass


class InvalidRequestError(ApiError, ValueError):
    """Raised before any request is sent when arguments are out of range."""

    pass


class SeedValidationError(InvalidRequestError):
    """Raised when a recommendations request has too few or too many seeds."""

    pass
