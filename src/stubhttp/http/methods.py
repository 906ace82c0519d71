"""Common HTTP methods.

Access keys accept either a plain string or a ``Method`` member; both
render to the same upper-case token.
"""

from enum import StrEnum


class Method(StrEnum):
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    CONNECT = "CONNECT"
