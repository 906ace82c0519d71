"""stubhttp: register expected HTTP replies, serve them, count the calls.

Basic usage::

    from stubhttp.testing import ExpectationServer

    async with ExpectationServer("/api") as server:
        server.expect("GET", server.format_path("widgets"), 200, "[]")
        response = await server.client.get(server.format_url("widgets"))

Hosting the router behind a real ASGI server::

    from stubhttp import ExpectationApp, ExpectationRouter

    router = ExpectationRouter("/api")
    app = ExpectationApp(router)
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "ContentResponse",
    "ExpectationApp",
    "ExpectationRouter",
    "Method",
    "Request",
    "Response",
    "RoutingError",
    "StubConfig",
    "StubError",
    "UrlFormatError",
    "build_url",
    "string_query_parameter",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import stubhttp`` fast while providing a clean top-level API.
    """
    if name == "ExpectationApp":
        from stubhttp.app import ExpectationApp

        return ExpectationApp

    if name == "StubConfig":
        from stubhttp.config import StubConfig

        return StubConfig

    if name in ("ExpectationRouter", "ContentResponse"):
        from stubhttp import expect as _expect

        return getattr(_expect, name)

    if name in ("Method", "Request", "Response"):
        from stubhttp import http as _http

        return getattr(_http, name)

    if name in ("StubError", "ConfigurationError", "UrlFormatError", "RoutingError"):
        from stubhttp import errors as _errors

        return getattr(_errors, name)

    if name in ("build_url", "string_query_parameter"):
        from stubhttp.util import urls as _urls

        return getattr(_urls, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
