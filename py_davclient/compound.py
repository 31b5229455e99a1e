"""Operations composed from several WebDAV requests.

None of these are transactional. A failure part way through leaves the
server in whatever state the completed steps produced.
"""

from __future__ import annotations

import logging
from pathlib import Path

from . import client as ops
from .fs_local import LocalFileSystem
from .internal import (
    Client,
    FileNotFound,
    IsADirectory,
    NotADirectory,
    UnexpectedStatus,
)
from .webdav import FileKind, LocalStat, Outcome, UploadSource

logger = logging.getLogger("py_davclient")


def check_upload_file(path: str | Path, filesystem: LocalFileSystem | None = None) -> LocalStat:
    """Check that a local path can be uploaded as a single file.

    Raises:
        FileNotFound: If the path is missing, unreadable or not a regular file
        IsADirectory: If the path is a directory
    """
    fs = filesystem or LocalFileSystem()
    info = fs.stat(path)
    if not info.exists:
        raise FileNotFound(path)
    if info.kind is FileKind.DIRECTORY:
        raise IsADirectory(path)
    if info.kind is not FileKind.REGULAR or not info.readable:
        raise FileNotFound(path)
    return info


def check_upload_directory(path: str | Path, filesystem: LocalFileSystem | None = None) -> LocalStat:
    """Check that a local path can be uploaded as a directory tree.

    Raises:
        NotADirectory: If the path is missing or not a directory
        FileNotFound: If the directory cannot be listed
    """
    fs = filesystem or LocalFileSystem()
    info = fs.stat(path)
    if not info.is_dir:
        raise NotADirectory(path)
    if not info.readable:
        raise FileNotFound(path)
    return info


def plan_directory_upload(
    root: str | Path,
    filesystem: LocalFileSystem | None = None,
    include_hidden: bool = False,
) -> list[LocalStat]:
    """Walk a local tree depth-first and return its directories and files in upload order.

    The whole tree is read before anything is sent, so unreadable entries fail
    without touching the server. A directory reached a second time, e.g.
    through a symlink to one of its ancestors, is skipped.

    Raises:
        NotADirectory: If root is missing or not a directory
        FileNotFound: If a file or directory in the tree cannot be read
    """
    fs = filesystem or LocalFileSystem()
    plan: list[LocalStat] = []
    seen: set[Path] = set()

    def visit(directory: LocalStat) -> None:
        plan.append(directory)
        seen.add(directory.path.resolve())

        for entry in fs.list_entries(directory.path, include_hidden=include_hidden):
            info = fs.stat(entry)
            if info.is_dir:
                if entry.resolve() in seen:
                    logger.warning(f"skipping {entry}: directory already visited")
                    continue
                if not info.readable:
                    raise FileNotFound(entry)
                visit(info)
            elif info.is_file:
                if not info.readable:
                    raise FileNotFound(entry)
                plan.append(info)
            else:
                logger.warning(f"skipping {entry}: not a regular file or directory")

    visit(check_upload_directory(root, fs))
    return plan


def join_uri(base_uri: str, segments: list[str] | tuple[str, ...]) -> str:
    """Append path segments to a remote URI, separated by single slashes."""
    return "/".join([base_uri.rstrip("/"), *segments])


def relative_segments(root: Path, path: Path) -> tuple[str, ...]:
    """Path segments of ``path`` below ``root``, prefixed with the root's name.

    The root's basename anchors the remote layout, so ``proj/sub/b.txt``
    under root ``local/proj`` becomes ``("proj", "sub", "b.txt")``.
    """
    anchor = root.resolve().name
    parts = path.relative_to(root).parts
    return (anchor, *parts) if anchor else parts


async def put_file(
    host: str,
    uri: str,
    local_path: str | Path,
    token: str,
    *,
    transport: Client | None = None,
    filesystem: LocalFileSystem | None = None,
) -> Outcome:
    """Upload a local regular file to the specified URI.

    The local path is checked before any request is sent.

    Raises:
        FileNotFound: If the file does not exist or cannot be read
        IsADirectory: If the path is a directory; use put_directory instead
    """
    fs = filesystem or LocalFileSystem()
    info = check_upload_file(local_path, fs)
    return await ops.put(
        host, uri, UploadSource.from_file(info), token, transport=transport, filesystem=fs
    )


async def put_directory(
    host: str,
    uri: str,
    local_dir: str | Path,
    token: str,
    *,
    transport: Client | None = None,
    filesystem: LocalFileSystem | None = None,
    create_collections: bool = False,
    include_hidden: bool = False,
) -> None:
    """Recursively upload a local directory under the specified collection.

    Files land at ``uri/<basename of local_dir>/<path relative to local_dir>``.
    The tree is read first, then uploaded depth-first in name order; the
    upload stops at the first failure and files already sent stay on the server.

    Args:
        host: Server base URL
        uri: Remote collection to upload into
        local_dir: Local directory to mirror
        token: Basic authentication token
        transport: Transport to send requests through
        filesystem: Filesystem to read the tree from
        create_collections: Issue MKCOL for every directory level before its
            files. Otherwise the server must create collections on PUT or they
            must already exist.
        include_hidden: Also upload entries whose name starts with "."

    Raises:
        NotADirectory: If local_dir is missing or not a directory
        FileNotFound: If an entry of the tree cannot be read; nothing is sent then
        UnexpectedStatus: If an upload or collection creation is refused
    """
    fs = filesystem or LocalFileSystem()
    root = Path(local_dir)
    plan = plan_directory_upload(root, fs, include_hidden=include_hidden)

    async with ops.transport_scope(transport) as client:
        for info in plan:
            segments = relative_segments(root, info.path)
            if info.is_dir:
                if create_collections:
                    await _ensure_collection(client, host, join_uri(uri, segments) + "/", token)
                continue

            dest = join_uri(uri, segments)
            logger.debug(f"uploading {info.path} -> {dest}")
            outcome = await put_file(host, dest, info.path, token, transport=client, filesystem=fs)
            if not outcome.ok:
                raise UnexpectedStatus("PUT", dest, outcome)


async def _ensure_collection(client: Client, host: str, uri: str, token: str) -> None:
    outcome = await ops.mkcol(host, uri, token, transport=client)
    # 405 means the collection already exists
    if outcome.ok or outcome.status_code == 405:
        return
    raise UnexpectedStatus("MKCOL", uri, outcome)


async def move(
    host: str,
    source_uri: str,
    destination_uri: str,
    token: str,
    *,
    transport: Client | None = None,
) -> Outcome:
    """Move a resource using GET, PUT and DELETE.

    This is best effort, not atomic. If the DELETE fails or never happens the
    resource exists at both locations; a failed GET or PUT leaves the source
    untouched.

    Returns:
        Outcome of the final DELETE

    Raises:
        ValueError: If source and destination are the same URI
        UnexpectedStatus: If the GET does not return 200 or the PUT is refused
    """
    if source_uri == destination_uri:
        raise ValueError(f"source and destination are the same: {source_uri}")

    async with ops.transport_scope(transport) as client:
        fetched = await ops.get(host, source_uri, token, transport=client)
        if fetched.status_code != 200:
            raise UnexpectedStatus("GET", source_uri, fetched, expected=200)

        stored = await ops.put(host, destination_uri, fetched.body, token, transport=client)
        if not stored.ok:
            raise UnexpectedStatus("PUT", destination_uri, stored)

        logger.debug(f"moved {source_uri} -> {destination_uri}, deleting source")
        return await ops.delete(host, source_uri, token, transport=client)
