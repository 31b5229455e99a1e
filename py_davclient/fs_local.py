"""Local filesystem access used by uploads."""

from __future__ import annotations

import os
import stat as stat_module
from collections.abc import AsyncIterator
from pathlib import Path

from .internal import FileNotFound
from .webdav import FileKind, LocalStat

DEFAULT_CHUNK_SIZE = 64 * 1024


class LocalFileSystem:
    """Probe, enumerate and stream files from the local filesystem."""

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """Initialize local filesystem.

        Args:
            chunk_size: Number of bytes read per chunk when streaming a file
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk size must be positive, got {chunk_size}")
        self.chunk_size = chunk_size

    def stat(self, path: str | Path) -> LocalStat:
        """Probe a local path, following symlinks.

        Paths that cannot be stat'ed (missing, no permission, symlink loops)
        are reported with ``exists=False``.
        """
        path = Path(path)
        try:
            st = path.stat()
        except OSError:
            return LocalStat(path=path, exists=False)

        if stat_module.S_ISDIR(st.st_mode):
            kind = FileKind.DIRECTORY
            # Listing a directory needs both read and search permission
            readable = os.access(path, os.R_OK | os.X_OK)
        elif stat_module.S_ISREG(st.st_mode):
            kind = FileKind.REGULAR
            readable = os.access(path, os.R_OK)
        else:
            kind = FileKind.OTHER
            readable = False

        return LocalStat(
            path=path,
            exists=True,
            kind=kind,
            size=st.st_size if kind is FileKind.REGULAR else 0,
            readable=readable,
        )

    def list_entries(self, path: str | Path, include_hidden: bool = False) -> list[Path]:
        """List the children of a directory.

        Args:
            path: Directory to enumerate
            include_hidden: Whether to include names starting with "."

        Returns:
            Child paths sorted by name

        Raises:
            FileNotFound: If the directory cannot be listed
        """
        path = Path(path)
        try:
            with os.scandir(path) as it:
                names = [entry.name for entry in it]
        except OSError as e:
            raise FileNotFound(path) from e

        if not include_hidden:
            names = [name for name in names if not name.startswith(".")]

        return [path / name for name in sorted(names)]

    async def open_stream(self, path: str | Path) -> AsyncIterator[bytes]:
        """Stream a file's contents in chunks without loading it whole.

        Raises:
            FileNotFound: If the file cannot be opened
        """
        try:
            f = open(path, "rb")
        except OSError as e:
            raise FileNotFound(path) from e

        with f:
            while chunk := f.read(self.chunk_size):
                yield chunk
