"""ASGI response sending: translates a finished Response into ASGI messages.

The body is sent as the chunks it was written in, so a copied stream goes
out in the same pieces it was read.
"""

import logging

from stubhttp._internal.asgi import Send
from stubhttp.http.response import Response

logger = logging.getLogger("stubhttp.server")


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: Response, send: Send) -> None:
    """Translate a stubhttp Response into ASGI send() calls."""
    chunks = response.chunks if _body_allowed(response.status) else ()
    length = sum(len(chunk) for chunk in chunks)

    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    for name, value in response.headers:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))
    raw_headers.append((b"content-length", str(length).encode("latin-1")))

    logger.debug("Sending %d with %d body bytes", response.status, length)

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    for chunk in chunks[:-1]:
        await send(
            {
                "type": "http.response.body",
                "body": chunk,
                "more_body": True,
            }
        )
    await send(
        {
            "type": "http.response.body",
            "body": chunks[-1] if chunks else b"",
        }
    )
