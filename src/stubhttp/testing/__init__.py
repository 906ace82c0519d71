"""Test utilities for stubhttp.

Provides the in-process expectation server and access-count assertions::

    from stubhttp.testing import ExpectationServer, assert_accessed
"""

from stubhttp.testing.assertions import assert_accessed, assert_not_accessed
from stubhttp.testing.server import ExpectationServer

__all__ = [
    "ExpectationServer",
    "assert_accessed",
    "assert_not_accessed",
]
