"""URL helpers for building requests against an expectation server."""

from stubhttp.util.urls import (
    ExtractedPath,
    build_path,
    build_url,
    extract_path,
    string_query_parameter,
)

__all__ = [
    "ExtractedPath",
    "build_path",
    "build_url",
    "extract_path",
    "string_query_parameter",
]
