"""stubhttp exception hierarchy.

Shared across the URL builder, the expectation router and the ASGI app
so every module raises and catches the same types.
"""


class StubError(Exception):
    """Base for all stubhttp-specific errors."""


class ConfigurationError(StubError):
    """Raised when a registration or configuration is invalid.

    Typically raised from ``expect()`` when more than one response form
    is supplied in a single call.
    """


class UrlFormatError(StubError, ValueError):
    """The URL builder assembled a string that is not a valid URL."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Invalid URL {url!r}: {reason}")
        self.url = url
        self.reason = reason


class RoutingError(StubError):
    """An inbound request target could not be parsed as a URI.

    Fatal for the single request. The ASGI app re-raises it so the hosting
    server answers with a 5xx or drops the connection.
    """

    def __init__(self, target: str, detail: str = "Cannot parse request URI") -> None:
        super().__init__(f"{detail}: {target!r}")
        self.target = target
        self.detail = detail
