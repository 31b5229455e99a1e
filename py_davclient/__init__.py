"""A small asynchronous WebDAV client."""

from .client import delete, get, head, mkcol, put
from .compound import (
    check_upload_directory,
    check_upload_file,
    move,
    plan_directory_upload,
    put_directory,
    put_file,
)
from .config import ClientConfig
from .fs_local import LocalFileSystem
from .internal import (
    Client,
    DAVClientError,
    FileNotFound,
    IsADirectory,
    LocalPathError,
    NotADirectory,
    NotInitialized,
    TransportError,
    UnexpectedStatus,
)
from .session import CredentialStore, Session, initialize
from .webdav import Credentials, FileKind, LocalStat, Outcome, UploadSource

__version__ = "0.1.0"

__all__ = [
    "Client",
    "ClientConfig",
    "CredentialStore",
    "Credentials",
    "DAVClientError",
    "FileKind",
    "FileNotFound",
    "IsADirectory",
    "LocalFileSystem",
    "LocalPathError",
    "LocalStat",
    "NotADirectory",
    "NotInitialized",
    "Outcome",
    "Session",
    "TransportError",
    "UnexpectedStatus",
    "UploadSource",
    "check_upload_directory",
    "check_upload_file",
    "delete",
    "get",
    "head",
    "initialize",
    "mkcol",
    "plan_directory_upload",
    "move",
    "put",
    "put_directory",
    "put_file",
]
