"""Typed ASGI definitions.

Raw ASGI aliases for the app and sender, plus a typed view of the HTTP
scope for the request factory. Users never see these.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from dataclasses import dataclass
from typing import Any, TypeAlias
from urllib.parse import quote

# Raw ASGI types (matching the ASGI 3.0 interface)
Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]

# Left unescaped when rebuilding a target from a decoded path
_PATH_SAFE = "/:@!$&'()*+,;=-._~"


@dataclass(frozen=True, slots=True)
class HTTPScope:
    """Typed HTTP scope parsed from a raw ASGI scope dict."""

    method: str
    path: str
    raw_path: bytes
    query_string: bytes
    http_version: str
    headers: tuple[tuple[bytes, bytes], ...]
    server: tuple[str, int] | None
    client: tuple[str, int] | None

    @property
    def request_target(self) -> str:
        """The request target as the client sent it, without the query.

        Falls back to the re-encoded ``path`` when the server does not
        provide ``raw_path``. Some servers include the query string in
        ``raw_path``; it is stripped here. Raw bytes are read as UTF-8, the
        same charset percent escapes decode to.
        """
        if self.raw_path:
            return self.raw_path.decode("utf-8", errors="replace").split("?", 1)[0]
        return quote(self.path, safe=_PATH_SAFE)

    @classmethod
    def from_scope(cls, scope: Scope) -> "HTTPScope":
        """Parse raw ASGI scope into typed object."""
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope.get("path", "/"),
            raw_path=scope.get("raw_path") or b"",
            query_string=scope.get("query_string", b""),
            http_version=scope.get("http_version", "1.1"),
            headers=tuple(scope.get("headers", ())),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
        )
