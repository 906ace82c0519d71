"""Registered replies.

A ``ContentResponse`` pairs an access key's method and path with a status
code and at most one payload variant. The payload is a closed union, so the
dispatcher matches on its type instead of probing nullable fields.
"""

import io
from dataclasses import dataclass
from typing import BinaryIO, TypeAlias

from stubhttp._internal.types import BodySource, ExpectationHandler
from stubhttp.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class TextBody:
    """A text payload, written as UTF-8."""

    text: str


@dataclass(frozen=True, slots=True)
class StreamBody:
    """A binary payload copied into the response on dispatch.

    ``bytes`` are served fresh every time. A file object is read from its
    current position, so a one-shot stream is empty after its first use.
    """

    source: bytes | BinaryIO

    def open(self) -> BinaryIO:
        if isinstance(self.source, bytes | bytearray):
            return io.BytesIO(self.source)
        return self.source


@dataclass(frozen=True, slots=True)
class HandlerBody:
    """A callback that builds the whole response itself."""

    handler: ExpectationHandler


Payload: TypeAlias = TextBody | StreamBody | HandlerBody | None


def payload_for(body: BodySource | None = None, handler: ExpectationHandler | None = None) -> Payload:
    """Collapse the registration arguments into a single payload variant.

    Raises:
        ConfigurationError: If both a body and a handler are given, or the
            body is of an unsupported type.
    """
    if handler is not None:
        if body is not None:
            msg = "expect() takes either a body or a handler, not both"
            raise ConfigurationError(msg)
        if not callable(handler):
            msg = f"Expectation handler must be callable, got {type(handler).__name__}"
            raise ConfigurationError(msg)
        return HandlerBody(handler)
    if body is None:
        return None
    if isinstance(body, str):
        return TextBody(body)
    if isinstance(body, bytes | bytearray):
        return StreamBody(bytes(body))
    if hasattr(body, "read"):
        return StreamBody(body)
    msg = f"Unsupported body type: {type(body).__name__}. Use str, bytes, or a binary stream."
    raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class ContentResponse:
    """One registered reply for an access key."""

    method: str
    path: str
    code: int = 200
    payload: Payload = None

    @property
    def handler(self) -> ExpectationHandler | None:
        if isinstance(self.payload, HandlerBody):
            return self.payload.handler
        return None

    @property
    def body(self) -> str | None:
        if isinstance(self.payload, TextBody):
            return self.payload.text
        return None

    @property
    def body_stream(self) -> bytes | BinaryIO | None:
        if isinstance(self.payload, StreamBody):
            return self.payload.source
        return None

    def describe(self, *, include_body: bool = True) -> str:
        """One-line summary for logs."""
        head = f"{self.method.upper()} {self.path} -> {self.code}"
        match self.payload:
            case HandlerBody(handler=handler):
                name = getattr(handler, "__qualname__", repr(handler))
                return f"{head} (handler {name})"
            case TextBody(text=text):
                if include_body:
                    return f"{head} (body {text!r})"
                return f"{head} (body, {len(text)} chars)"
            case StreamBody(source=source):
                kind = "bytes" if isinstance(source, bytes) else type(source).__name__
                return f"{head} (body stream: {kind})"
            case _:
                return f"{head} (no body)"
