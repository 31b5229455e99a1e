"""Low-level helpers and error types for the WebDAV client."""

from __future__ import annotations

import base64
from http import HTTPStatus
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..webdav import Outcome


def basic_token(user: str, password: str) -> str:
    """Encode a user/password pair as a Basic authentication token.

    This is a reversible Base64 encoding of ``user:password``, not a digest.
    """
    return base64.b64encode(f"{user}:{password}".encode()).decode("ascii")


def auth_header(token: str) -> dict[str, str]:
    """Build the Authorization header for a Basic token."""
    return {"Authorization": f"Basic {token}"}


def full_url(host: str, uri: str) -> str:
    """Concatenate host and URI. No normalization is performed."""
    return host + uri


def status_text(code: int) -> str:
    """Return the standard reason phrase for a status code."""
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return "Unknown"


class DAVClientError(Exception):
    """Base class for all client errors."""


class NotInitialized(DAVClientError):
    """An operation was attempted before session credentials exist."""

    def __init__(self, message: str = "davclient: session credentials are not initialized"):
        super().__init__(message)


class TransportError(DAVClientError):
    """Network, connection or timeout failure below the HTTP layer."""

    def __init__(self, method: str, url: str, err: Exception):
        self.method = method
        self.url = url
        self.err = err
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"{self.method} {self.url}: {self.err}"


class UnexpectedStatus(DAVClientError):
    """A compound operation required a status it did not receive."""

    def __init__(self, method: str, uri: str, outcome: Outcome, expected: int | None = None):
        self.method = method
        self.uri = uri
        self.outcome = outcome
        self.expected = expected
        super().__init__(str(self))

    @property
    def code(self) -> int:
        return self.outcome.status_code

    def __str__(self) -> str:
        wanted = str(self.expected) if self.expected is not None else "2xx"
        return (
            f"{self.method} {self.uri}: expected {wanted}, "
            f"got {self.outcome.status_code} {self.outcome.status_text}"
        )


class LocalPathError(DAVClientError):
    """A local filesystem precondition failed before any request was sent."""

    reason = "invalid local path"

    def __init__(self, path: str | Path):
        self.path = Path(path)
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"{self.path}: {self.reason}"


class FileNotFound(LocalPathError):
    """The local path does not exist or cannot be opened."""

    reason = "could not open file"


class NotADirectory(LocalPathError):
    """A directory upload was requested for something that is not a directory."""

    reason = "is not a directory or does not exist"


class IsADirectory(LocalPathError):
    """A single-file upload was requested for a directory."""

    reason = "is a directory, use put_directory"
