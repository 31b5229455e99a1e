"""Internal helpers shared by the WebDAV client layers."""

from .client import Client
from .internal import (
    DAVClientError,
    FileNotFound,
    IsADirectory,
    LocalPathError,
    NotADirectory,
    NotInitialized,
    TransportError,
    UnexpectedStatus,
    auth_header,
    basic_token,
    full_url,
)

__all__ = [
    "Client",
    "DAVClientError",
    "FileNotFound",
    "IsADirectory",
    "LocalPathError",
    "NotADirectory",
    "NotInitialized",
    "TransportError",
    "UnexpectedStatus",
    "auth_header",
    "basic_token",
    "full_url",
]
