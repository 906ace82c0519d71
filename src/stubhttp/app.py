"""ASGI application serving an expectation router.

Any ASGI 3.0 server can host it::

    router = ExpectationRouter("/api")
    app = ExpectationApp(router)
    # uvicorn module:app

Inside tests, ``stubhttp.testing.ExpectationServer`` runs it in-process.
"""

import logging

from stubhttp._internal.asgi import Receive, Scope, Send
from stubhttp.config import StubConfig
from stubhttp.errors import RoutingError
from stubhttp.expect.router import ExpectationRouter
from stubhttp.http.request import Request
from stubhttp.http.response import Response
from stubhttp.server.sender import send_response

logger = logging.getLogger("stubhttp.server")


class ExpectationApp:
    """ASGI entry point wrapping one ``ExpectationRouter``.

    When no router is given, one is built from *config*.
    """

    def __init__(self, router: ExpectationRouter | None = None, *, config: StubConfig | None = None) -> None:
        self.config = config or StubConfig()
        if router is None:
            router = ExpectationRouter(self.config.base_resource, log_bodies=self.config.log_bodies)
        self.router = router

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Acknowledges lifespan messages, dispatches HTTP scopes through the
        router, and ignores everything else.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            logger.debug("Ignoring unsupported scope type: %s", scope["type"])
            return

        request = Request.from_asgi(scope, receive)
        response = Response()
        try:
            await self.router.dispatch(request, response)
        except RoutingError:
            logger.exception("Cannot route %s %r", request.method, request.target)
            raise

        await send_response(response, send)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol. Nothing to set up or tear down."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                logger.info("Expectation server ready at base resource %s", self.router.base_resource)
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
