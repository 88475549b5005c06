"""Exceptions and warnings raised by the BoM Water Data client.

Every failure carries the underlying error or service message in its
text so that problems against the live service can be diagnosed from
the traceback alone.
"""

from __future__ import annotations


class BomWaterError(Exception):
    """Base class for all errors raised by ``bomwater``."""


class TransportError(BomWaterError):
    """The HTTP request failed (connection error, timeout, non-2xx status).

    Args:
        message: Human-readable description including the underlying error.
        url: The request URL, if known.
        status_code: HTTP status code, or None when no response arrived.
    """

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class NoMatchError(BomWaterError):
    """The service answered a listing request with ``"No matches."``."""


class UnsupportedRequestError(BomWaterError, ValueError):
    """The ``request`` parameter names a kind the normalizer cannot parse."""


class MalformedResponseError(BomWaterError, ValueError):
    """The response body could not be decoded into the expected shape."""


class ResponseWarning(UserWarning):
    """Non-fatal warning signalled by the service on a successful response."""
