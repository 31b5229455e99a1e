"""WebDAV client types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class Credentials:
    """Server host and pre-encoded Basic authentication token."""

    host: str
    token: str

    def __repr__(self) -> str:
        return f"Credentials(host={self.host!r}, token='[REDACTED]')"


@dataclass
class Outcome:
    """Result of a single HTTP exchange, returned verbatim to the caller."""

    status_code: int
    status_text: str
    body: bytes = b""

    @property
    def ok(self) -> bool:
        """Whether the status is in the 2xx class."""
        return self.status_code // 100 == 2

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class FileKind(Enum):
    """Type of a local filesystem entry."""

    REGULAR = "regular"
    DIRECTORY = "directory"
    OTHER = "other"


@dataclass
class LocalStat:
    """Result of probing a local path."""

    path: Path
    exists: bool
    kind: FileKind | None = None
    size: int = 0
    readable: bool = False

    @property
    def is_file(self) -> bool:
        return self.exists and self.kind is FileKind.REGULAR

    @property
    def is_dir(self) -> bool:
        return self.exists and self.kind is FileKind.DIRECTORY


@dataclass
class UploadSource:
    """Body of a PUT request: an in-memory buffer or a local regular file."""

    data: bytes | None = None
    path: Path | None = None
    size: int | None = None

    @classmethod
    def from_bytes(cls, data: bytes | str) -> UploadSource:
        if isinstance(data, str):
            data = data.encode("utf-8")
        return cls(data=data, size=len(data))

    @classmethod
    def from_file(cls, stat: LocalStat) -> UploadSource:
        return cls(path=stat.path, size=stat.size)

    @property
    def is_file(self) -> bool:
        return self.path is not None
