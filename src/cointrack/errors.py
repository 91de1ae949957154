"""Domain exceptions.

Credential errors are raised once at startup and abort the process. Request
errors are raised per call by exchange clients and are never retried here.
"""

from __future__ import annotations


class CointrackError(Exception):
    """Base class for all cointrack errors."""


class CredentialsError(CointrackError):
    """Credentials could not be loaded."""


class NotFoundError(CredentialsError):
    """The credential path does not resolve to a readable file."""

    def __init__(self, path: str, reason: str | None = None):
        self.path = path
        message = f"Credential file not found: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class MalformedCredentialsError(CredentialsError):
    """The credential file exists but does not hold a usable key pair."""


class RequestError(CointrackError):
    """A single exchange request failed."""


class TransportError(RequestError):
    """DNS, connection or timeout failure before an HTTP status was received."""


class ExchangeRejectedError(RequestError):
    """The exchange answered with a non-2xx status."""

    def __init__(self, status_code: int, code: int | None = None, message: str | None = None):
        self.status_code = status_code
        self.code = code
        self.message = message
        text = f"Exchange rejected request: HTTP {status_code}"
        if code is not None:
            text += f" (code {code})"
        if message:
            text += f": {message}"
        super().__init__(text)


class MalformedResponseError(RequestError):
    """A 2xx response whose body is not a valid account snapshot."""
