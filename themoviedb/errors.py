"""Exception hierarchy for the TheMovieDb client."""

from typing import Optional


class TheMovieDbError(Exception):
    """Base exception for all client failures."""

    pass


class ConfigurationError(TheMovieDbError):
    """Raised when the client configuration is missing or invalid."""

    pass


class TransportError(TheMovieDbError):
    """Raised when a document could not be fetched from the API."""

    def __init__(self, message: str, *, url: Optional[str] = None, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ResponseParseError(TransportError):
    """Raised when the API returned a body that is not well-formed XML."""

    pass
