"""URL assembly for tests that talk to an expectation server.

Usage::

    from stubhttp.util.urls import build_url

    build_url("http://127.0.0.1:8080", "/api/", "widgets", params={"page": "2"})
    # -> "http://127.0.0.1:8080/api/widgets?page=2"

Query values are appended as given. Callers that need percent-encoding
must encode values before passing them in.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import unquote, urlsplit

import httpx

from stubhttp.errors import UrlFormatError

# Protocols a URL parser knows how to open
KNOWN_SCHEMES = frozenset({"http", "https", "ftp", "file", "jar", "mailto"})

# Schemes that require a network location
NETWORK_SCHEMES = frozenset({"http", "https", "ftp"})


@dataclass(frozen=True, slots=True)
class ExtractedPath:
    """Outcome of reading a path out of a registration URL.

    ``absolute`` is False when the input was not an absolute URL and
    ``path`` is the input as typed.
    """

    path: str
    absolute: bool


def string_query_parameter(value: object) -> str:
    """Wrap *value* in percent-encoded double quotes (``%22``)."""
    return f"%22{value}%22"


def build_url(
    base_url: str,
    *parts: str | None,
    base_path: str | None = None,
    params: Mapping[str, str] | None = None,
) -> str:
    """Join *base_url*, path *parts* and query *params* into one URL.

    With no *parts* the base URL is returned verbatim. A first part that
    already starts with *base_url* is used as-is instead of being prefixed.
    Segments are joined with exactly one ``/``; empty and ``/`` segments
    contribute nothing.

    *base_path* is only run through the segment rules when it is empty,
    ``None`` or ``/``; pass a real prefix as the first part.

    Raises:
        UrlFormatError: If the assembled string is not a valid URL.
    """
    if not parts:
        return base_url

    buffer: list[str] = []
    first = parts[0]
    if base_url and (first is None or not first.startswith(base_url)):
        buffer.append(base_url)

    if base_path is None or len(base_path) < 1 or base_path == "/":
        _append_segment(buffer, base_path)

    for part in parts:
        _append_segment(buffer, part)

    if params:
        buffer.append("?")
        buffer.append("&".join(f"{key}={value}" for key, value in params.items()))

    url = "".join(buffer)
    _validate_url(url)
    return url


def build_path(*parts: str | None) -> str:
    """Join path segments into an absolute path.

    Same segment rules as ``build_url``; no parts gives ``/``.
    """
    buffer: list[str] = ["/"]
    for part in parts:
        _append_segment(buffer, part)
    return "".join(buffer)


def extract_path(url: str) -> ExtractedPath:
    """Return the path component of an absolute URL, else *url* as typed.

    Paths from absolute URLs are percent-decoded so they share a key space
    with inbound request paths. An absolute URL with no path maps to ``/``.
    A network scheme without a host (``http:/foo``) still counts as absolute
    when its path starts with ``/``.
    """
    try:
        split = urlsplit(url)
    except ValueError:
        return ExtractedPath(path=url, absolute=False)

    scheme = split.scheme.lower()
    if scheme not in KNOWN_SCHEMES:
        return ExtractedPath(path=url, absolute=False)
    if scheme in NETWORK_SCHEMES and not split.netloc and not split.path.startswith("/"):
        return ExtractedPath(path=url, absolute=False)

    return ExtractedPath(path=unquote(split.path) or "/", absolute=True)


def _append_segment(buffer: list[str], segment: str | None) -> None:
    """Append *segment* with a single ``/`` separator, skipping no-op segments."""
    if segment is None:
        return
    stripped = segment.strip()
    if not stripped or stripped == "/":
        return

    if segment.startswith("/"):
        segment = segment[1:]

    if buffer and not buffer[-1].endswith("/"):
        buffer.append("/")

    buffer.append(segment)


def _validate_url(url: str) -> None:
    try:
        split = urlsplit(url)
    except ValueError as exc:
        raise UrlFormatError(url, str(exc)) from exc

    scheme = split.scheme.lower()
    if not scheme:
        raise UrlFormatError(url, "no protocol")
    if scheme not in KNOWN_SCHEMES:
        raise UrlFormatError(url, f"unknown protocol: {scheme}")
    if scheme in NETWORK_SCHEMES and not split.hostname:
        raise UrlFormatError(url, "missing host")

    try:
        httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise UrlFormatError(url, str(exc)) from exc
