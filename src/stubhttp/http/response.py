"""Mutable HTTP response writer.

The router and registered handlers build the reply by calling methods on a
``Response``; the sender turns the finished object into ASGI messages.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import BinaryIO

from anyio import to_thread

COPY_CHUNK_SIZE = 64 * 1024


@dataclass(slots=True)
class Response:
    """An outbound HTTP response under construction.

    Starts as ``200`` with no body. ``send_error()`` marks the response as an
    error reply; text written afterwards is still appended so handlers stay
    in control of the payload.
    """

    status: int = 200
    content_type: str = "text/plain; charset=utf-8"
    headers: list[tuple[str, str]] = field(default_factory=list)
    is_error: bool = False
    _chunks: list[bytes] = field(default_factory=list, repr=False)

    # -- Status and headers --

    def set_status(self, status: int) -> None:
        """Set the status code without touching the body."""
        self.status = status

    def set_content_type(self, content_type: str) -> None:
        self.content_type = content_type

    def add_header(self, name: str, value: str) -> None:
        """Append a header; repeated names are kept in order."""
        self.headers.append((name, value))

    def add_headers(self, headers: Mapping[str, str]) -> None:
        self.headers.extend(headers.items())

    def send_error(self, status: int, message: str | None = None) -> None:
        """Reply with an error status, optionally carrying *message* as the body.

        Any body written before the call is discarded.
        """
        self.status = status
        self.is_error = True
        self._chunks.clear()
        if message is not None:
            self.write(message)

    # -- Body --

    def write(self, text: str) -> None:
        """Append text (UTF-8) to the body."""
        if text:
            self._chunks.append(text.encode("utf-8"))

    def write_bytes(self, data: bytes) -> None:
        """Append raw bytes to the body."""
        if data:
            self._chunks.append(bytes(data))

    async def copy_from(self, source: BinaryIO, *, chunk_size: int = COPY_CHUNK_SIZE) -> int:
        """Copy a binary stream into the body until EOF.

        Blocking reads run in a worker thread via ``anyio.to_thread`` so a
        slow file does not stall the event loop. Returns the bytes copied.
        """
        copied = 0
        while True:
            chunk = await to_thread.run_sync(source.read, chunk_size)
            if not chunk:
                break
            self._chunks.append(bytes(chunk))
            copied += len(chunk)
        return copied

    # -- Body helpers --

    @property
    def chunks(self) -> tuple[bytes, ...]:
        """Body chunks in write order."""
        return tuple(self._chunks)

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        return b"".join(self._chunks)

    @property
    def text(self) -> str:
        """Body as string."""
        return self.body_bytes.decode("utf-8")
