"""Invoke helper for expectation handlers, sync or async.

Registered handlers can be ``def`` or ``async def``. The router is the only
caller, but keeping the check here means it lives in exactly one place.
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's a coroutine.

    Works with both sync and async callables::

        def teapot(request, response):
            response.set_status(418)

        async def echo(request, response):
            response.write_bytes(await request.body())
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
