"""Shared authenticated session over the WebDAV operations."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from . import client as ops
from . import compound
from .config import ClientConfig
from .fs_local import LocalFileSystem
from .internal import Client, NotInitialized, basic_token
from .webdav import Credentials, Outcome, UploadSource

logger = logging.getLogger("py_davclient")


def credentials_from_config(config: ClientConfig) -> Credentials:
    """Derive credentials from a validated config."""
    config.validate()
    host = config.host.rstrip("/")
    if config.token is not None:
        return Credentials(host=host, token=config.token)
    return Credentials(host=host, token=basic_token(config.user, config.password))


class CredentialStore:
    """Holds the one live credential set of a session.

    Credentials are immutable; re-initializing swaps the whole set for every
    later caller.
    """

    def __init__(self) -> None:
        self._credentials: Credentials | None = None

    def initialize(self, config: ClientConfig | Mapping[str, Any]) -> Credentials:
        """Replace the stored credentials.

        Args:
            config: ClientConfig or a mapping with host, user, password or token

        Returns:
            The new credentials
        """
        if not isinstance(config, ClientConfig):
            config = ClientConfig.from_mapping(config)
        self._credentials = credentials_from_config(config)
        logger.debug(f"credentials initialized for {self._credentials.host}")
        return self._credentials

    def current(self) -> Credentials:
        """Return the most recently initialized credentials.

        Raises:
            NotInitialized: If initialize has not been called
        """
        if self._credentials is None:
            raise NotInitialized()
        return self._credentials

    @property
    def initialized(self) -> bool:
        return self._credentials is not None


class Session:
    """WebDAV client bound to a credential store and a pooled transport.

    One session may be shared by many concurrent tasks. Credentials are read
    at the start of every call, so a re-initialization applies to all calls
    made after it.
    """

    def __init__(
        self,
        store: CredentialStore | None = None,
        transport: Client | None = None,
        filesystem: LocalFileSystem | None = None,
    ):
        """Initialize session.

        Args:
            store: Credential store (an empty one if None)
            transport: Transport shared by all calls (creates default if None)
            filesystem: Filesystem used for uploads
        """
        self.store = store or CredentialStore()
        self.transport = transport or Client()
        self.filesystem = filesystem or LocalFileSystem()

    @classmethod
    def initialize(
        cls,
        config: ClientConfig | Mapping[str, Any] | None = None,
        *,
        transport: Client | None = None,
        filesystem: LocalFileSystem | None = None,
        **options: Any,
    ) -> Session:
        """Create a session from a config or keyword options.

        Example:
            session = Session.initialize(host="https://dav.example.com", user="u", password="p")
        """
        if config is None:
            config = ClientConfig(**options)
        elif options:
            raise TypeError("pass either a config or keyword options, not both")
        elif not isinstance(config, ClientConfig):
            config = ClientConfig.from_mapping(config)

        store = CredentialStore()
        store.initialize(config)
        if transport is None:
            transport = Client(
                supports_mkcol=config.supports_mkcol,
                timeout=config.timeout,
                debug=config.debug,
            )
        return cls(store, transport, filesystem)

    def reinitialize(self, config: ClientConfig | Mapping[str, Any]) -> Credentials:
        """Replace the credentials used by all later calls."""
        return self.store.initialize(config)

    @property
    def credentials(self) -> Credentials:
        return self.store.current()

    async def get(self, uri: str) -> Outcome:
        """GET the resource at the specified URI."""
        creds = self.store.current()
        return await ops.get(creds.host, uri, creds.token, transport=self.transport)

    async def put(self, uri: str, data: bytes | str | UploadSource) -> Outcome:
        """PUT data into the resource at the specified URI."""
        creds = self.store.current()
        return await ops.put(
            creds.host, uri, data, creds.token, transport=self.transport, filesystem=self.filesystem
        )

    async def delete(self, uri: str) -> Outcome:
        """DELETE the resource at the specified URI."""
        creds = self.store.current()
        return await ops.delete(creds.host, uri, creds.token, transport=self.transport)

    async def head(self, uri: str) -> Outcome:
        creds = self.store.current()
        return await ops.head(creds.host, uri, creds.token, transport=self.transport)

    async def mkcol(self, uri: str) -> Outcome:
        """Create a collection at the specified URI."""
        creds = self.store.current()
        return await ops.mkcol(creds.host, uri, creds.token, transport=self.transport)

    async def put_file(self, uri: str, local_path: str | Path) -> Outcome:
        """Upload a local file to the specified URI."""
        creds = self.store.current()
        return await compound.put_file(
            creds.host, uri, local_path, creds.token,
            transport=self.transport, filesystem=self.filesystem,
        )

    async def put_directory(
        self,
        uri: str,
        local_dir: str | Path,
        create_collections: bool = False,
        include_hidden: bool = False,
    ) -> None:
        """Recursively upload a local directory under the specified collection."""
        creds = self.store.current()
        await compound.put_directory(
            creds.host, uri, local_dir, creds.token,
            transport=self.transport,
            filesystem=self.filesystem,
            create_collections=create_collections,
            include_hidden=include_hidden,
        )

    async def move(self, source_uri: str, destination_uri: str) -> Outcome:
        """Move a resource using GET, PUT and DELETE."""
        creds = self.store.current()
        return await compound.move(
            creds.host, source_uri, destination_uri, creds.token, transport=self.transport
        )

    async def close(self) -> None:
        """Close the transport."""
        await self.transport.close()

    async def __aenter__(self) -> Session:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


def initialize(config: ClientConfig | Mapping[str, Any] | None = None, **options: Any) -> Session:
    """Create a session; shorthand for :meth:`Session.initialize`."""
    return Session.initialize(config, **options)
