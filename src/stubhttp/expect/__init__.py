"""Expectation registration and dispatch."""

from stubhttp.expect.content import ContentResponse, HandlerBody, StreamBody, TextBody
from stubhttp.expect.router import ExpectationRouter, get_access_key, parse_request_path

__all__ = [
    "ContentResponse",
    "ExpectationRouter",
    "HandlerBody",
    "StreamBody",
    "TextBody",
    "get_access_key",
    "parse_request_path",
]
