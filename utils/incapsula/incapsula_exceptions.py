"""Incapsula API exception classes."""

from typing import Optional


class IncapsulaAPIError(Exception):
    """Base exception for Incapsula API errors."""
    pass


class IncapsulaRequestError(IncapsulaAPIError):
    """The HTTP call itself failed (network, connection)."""
    pass


class IncapsulaTimeoutError(IncapsulaRequestError):
    """The HTTP call timed out."""
    pass


class IncapsulaAuthenticationError(IncapsulaAPIError):
    """API id or API key is missing."""
    pass


class IncapsulaParseError(IncapsulaAPIError):
    """Response body is not JSON of the expected shape."""

    def __init__(self, message: str, body: str = "") -> None:
        super().__init__(message)
        self.body = body


class IncapsulaServiceError(IncapsulaAPIError):
    """Response decoded fine but carried a nonzero result code."""

    def __init__(self, message: str, res: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.res = res
        self.body = body
