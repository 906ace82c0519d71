"""HTTP request, response and method types."""

from stubhttp.http.methods import Method
from stubhttp.http.request import Request
from stubhttp.http.response import Response

__all__ = ["Method", "Request", "Response"]
