"""Shared fixtures: an in-memory WebDAV server behind httpx.MockTransport."""

from __future__ import annotations

import httpx
import pytest

from py_davclient.internal import Client, basic_token

HOST = "http://dav.test"
TOKEN = basic_token("alice", "secret")


class FakeDAVServer:
    """Minimal WebDAV collection keeping resources in a dict."""

    def __init__(self, token: str = TOKEN):
        self.token = token
        self.resources: dict[str, bytes] = {}
        self.collections: set[str] = set()
        self.requests: list[tuple[str, str]] = []
        self.auth_headers: list[str | None] = []
        # path -> status returned instead of handling the request
        self.fail: dict[tuple[str, str], int] = {}
        self.allow_mkcol = True

    async def handler(self, request: httpx.Request) -> httpx.Response:
        body = await request.aread()
        method = request.method
        path = request.url.path
        self.requests.append((method, path))
        self.auth_headers.append(request.headers.get("authorization"))

        if request.headers.get("authorization") != f"Basic {self.token}":
            return httpx.Response(401)
        if (method, path) in self.fail:
            return httpx.Response(self.fail[(method, path)])

        if method == "GET":
            if path in self.resources:
                return httpx.Response(200, content=self.resources[path])
            return httpx.Response(404, content=b"not found")
        if method == "HEAD":
            return httpx.Response(200 if path in self.resources or path in self.collections else 404)
        if method == "PUT":
            existed = path in self.resources
            self.resources[path] = body
            return httpx.Response(204 if existed else 201)
        if method == "DELETE":
            if self.resources.pop(path, None) is not None:
                return httpx.Response(204)
            return httpx.Response(404)
        if method == "MKCOL" and self.allow_mkcol:
            if path in self.collections:
                return httpx.Response(405)
            self.collections.add(path)
            return httpx.Response(201)
        return httpx.Response(405)

    def methods(self) -> list[str]:
        return [method for method, _ in self.requests]


@pytest.fixture
def server() -> FakeDAVServer:
    return FakeDAVServer()


@pytest.fixture
def transport(server: FakeDAVServer) -> Client:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(server.handler))
    return Client(http_client)


@pytest.fixture
def host() -> str:
    return HOST


@pytest.fixture
def token() -> str:
    return TOKEN
