"""Single-request WebDAV operations.

Every function takes the server ``host``, a resource ``uri`` and a Basic
``token`` explicitly, for callers that bypass the shared session. Responses
are returned verbatim as an :class:`Outcome`, including 4xx and 5xx statuses.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import aclosing, asynccontextmanager

from .fs_local import LocalFileSystem
from .internal import Client, auth_header, full_url
from .webdav import Outcome, UploadSource

logger = logging.getLogger("py_davclient")

# Name of the file PUT into a new collection when MKCOL has to be emulated
MKCOL_PLACEHOLDER = ".davclient-mkcol"


@asynccontextmanager
async def transport_scope(transport: Client | None) -> AsyncIterator[Client]:
    """Yield the given transport, or a private one closed on exit."""
    if transport is not None:
        yield transport
        return

    async with Client() as client:
        yield client


async def head(host: str, uri: str, token: str, *, transport: Client | None = None) -> Outcome:
    """HEAD request at the specified URI."""
    async with transport_scope(transport) as client:
        return await client.request("HEAD", full_url(host, uri), auth_header(token))


async def get(host: str, uri: str, token: str, *, transport: Client | None = None) -> Outcome:
    """GET the resource at the specified URI.

    Args:
        host: Server base URL, e.g. ``https://dav.example.com``
        uri: Resource path, e.g. ``/dir/file.txt``
        token: Basic authentication token
        transport: Transport to send the request through

    Returns:
        Outcome with the full response body
    """
    async with transport_scope(transport) as client:
        return await client.request("GET", full_url(host, uri), auth_header(token))


async def delete(host: str, uri: str, token: str, *, transport: Client | None = None) -> Outcome:
    """DELETE the resource at the specified URI."""
    async with transport_scope(transport) as client:
        return await client.request("DELETE", full_url(host, uri), auth_header(token))


async def put(
    host: str,
    uri: str,
    data: bytes | str | UploadSource,
    token: str,
    *,
    transport: Client | None = None,
    filesystem: LocalFileSystem | None = None,
) -> Outcome:
    """PUT data into the resource at the specified URI.

    A file-backed :class:`UploadSource` is streamed from disk chunk by chunk;
    anything else is sent as a single in-memory body.

    Args:
        host: Server base URL
        uri: Resource path
        data: Body bytes, text (sent as UTF-8) or an upload source
        token: Basic authentication token
        transport: Transport to send the request through
        filesystem: Filesystem used to stream file sources

    Returns:
        Outcome of the PUT
    """
    if not isinstance(data, UploadSource):
        data = UploadSource.from_bytes(data)

    url = full_url(host, uri)
    headers = auth_header(token)
    async with transport_scope(transport) as client:
        if not data.is_file:
            return await client.request("PUT", url, headers, data.data)

        fs = filesystem or LocalFileSystem()
        if data.size is not None:
            headers["Content-Length"] = str(data.size)
        # Released even if the request fails mid-body
        async with aclosing(fs.open_stream(data.path)) as stream:
            return await client.request("PUT", url, headers, stream)


async def mkcol(host: str, uri: str, token: str, *, transport: Client | None = None) -> Outcome:
    """Create a collection at the specified URI.

    Transports that cannot send MKCOL get the same effect by PUTting a
    placeholder file into the new collection and deleting it again, which
    leaves an empty collection behind. The DELETE outcome is returned then.
    """
    async with transport_scope(transport) as client:
        if client.supports_mkcol:
            return await client.request("MKCOL", full_url(host, uri), auth_header(token))

        placeholder = uri.rstrip("/") + "/" + MKCOL_PLACEHOLDER
        logger.debug(f"emulating MKCOL {uri} via {placeholder}")
        created = await put(host, placeholder, b"", token, transport=client)
        if not created.ok:
            return created
        return await delete(host, placeholder, token, transport=client)
