"""Immutable HTTP request.

Frozen metadata with async body access. This is the object registered
handlers receive, unmodified, as their first argument.
"""

from __future__ import annotations

import json as json_module
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import Any

import httpx

from stubhttp._internal.asgi import HTTPScope, Receive, Scope


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable inbound HTTP request.

    ``path`` is the percent-decoded path the server computed; ``target`` is
    the raw request target the client sent, which the router parses itself.
    Body is read asynchronously via ``.body()``, ``.text()``, ``.json()``.
    """

    method: str
    path: str
    target: str
    headers: httpx.Headers
    query: httpx.QueryParams
    http_version: str
    server: tuple[str, int] | None
    client: tuple[str, int] | None

    # Private: ASGI receive callable for body streaming
    _receive: Receive

    # Private: mutable cache for the body
    # (dict contents are mutable even though the field reference is frozen)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Request target plus query string."""
        qs = str(self.query)
        if qs:
            return f"{self.target}?{qs}"
        return self.target

    async def body(self) -> bytes:
        """Read the full request body.

        Result is cached: the ASGI receive is consumed once, then the same
        bytes are returned on subsequent calls.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def text(self) -> str:
        """Read the body as text (UTF-8)."""
        raw = await self.body()
        return raw.decode("utf-8")

    async def json(self) -> Any:
        """Parse the body as JSON."""
        raw = await self.body()
        return json_module.loads(raw)

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        http_scope = HTTPScope.from_scope(scope)
        return cls(
            method=http_scope.method.upper(),
            path=http_scope.path,
            target=http_scope.request_target,
            headers=httpx.Headers(list(http_scope.headers)),
            query=httpx.QueryParams(http_scope.query_string.decode("latin-1")),
            http_version=http_scope.http_version,
            server=http_scope.server,
            client=http_scope.client,
            _receive=receive,
        )
