"""Shared type aliases used across stubhttp modules."""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, BinaryIO, TypeAlias

if TYPE_CHECKING:
    from stubhttp.http.request import Request
    from stubhttp.http.response import Response

# Expectation handler: receives (request, response) and builds the reply itself
ExpectationHandler: TypeAlias = Callable[["Request", "Response"], Awaitable[Any] | Any]

# Body forms accepted by registration calls
BodySource: TypeAlias = str | bytes | BinaryIO
