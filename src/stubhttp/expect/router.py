"""Expectation router: registered replies keyed by ``"METHOD PATH"``.

Each inbound request is counted, then answered from the registered errors,
then from the registered expectations, then with a bare 404.

Thread safety:
    A single lock guards the three mappings. Registration from a test
    thread while a server thread dispatches is safe. Handlers and stream
    copies run outside the lock.
"""

import logging
import re
import threading
from typing import overload
from urllib.parse import unquote, urlsplit

from stubhttp._internal.invoke import invoke
from stubhttp._internal.types import BodySource, ExpectationHandler
from stubhttp.config import normalize_base_resource
from stubhttp.errors import RoutingError
from stubhttp.expect.content import (
    ContentResponse,
    HandlerBody,
    Payload,
    StreamBody,
    TextBody,
    payload_for,
)
from stubhttp.http.methods import Method
from stubhttp.http.request import Request
from stubhttp.http.response import Response
from stubhttp.util.urls import extract_path

logger = logging.getLogger("stubhttp.expect")

# Characters a URI may not contain unescaped
_INVALID_TARGET_CHARS = re.compile(r'[\x00-\x20"<>\\^`{|}\x7f]')
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def get_access_key(method: str | Method, path: str) -> str:
    """Build the ``"METHOD PATH"`` key shared by every mapping."""
    return f"{str(method).upper()} {path}"


def parse_request_path(target: str) -> str:
    """Return the decoded absolute path of a raw request target.

    Accepts origin-form (``/a/b?x=1``) and absolute-form
    (``http://host/a/b``) targets.

    Raises:
        RoutingError: If the target is not a valid URI reference.
    """
    if _INVALID_TARGET_CHARS.search(target) or _BAD_ESCAPE.search(target):
        raise RoutingError(target)

    if target.startswith("/"):
        raw_path = target.split("#", 1)[0].split("?", 1)[0]
    else:
        try:
            raw_path = urlsplit(target).path
        except ValueError as exc:
            raise RoutingError(target) from exc

    return unquote(raw_path) or "/"


class ExpectationRouter:
    """Serves registered expectations and errors, counting every access.

    Usage::

        router = ExpectationRouter("/api")
        router.expect("GET", "/api/widgets", 200, '{"items": []}')
        router.register_exception("DELETE", "/api/widgets/1", 500, "boom")

    Registration URLs may be absolute (``http://host/api/widgets``), in
    which case only their path is used, or plain paths used as typed.
    Keys are built from the absolute request path, so plain paths should
    start with ``/``.
    """

    def __init__(self, base_resource: str | None = None, *, log_bodies: bool = True) -> None:
        self._base_resource = normalize_base_resource(base_resource)
        self._log_bodies = log_bodies
        self._lock = threading.Lock()
        self._expectations: dict[str, ContentResponse] = {}
        self._errors: dict[str, ContentResponse] = {}
        self._accesses: dict[str, int] = {}

    # -- Accessors --

    @property
    def base_resource(self) -> str:
        return self._base_resource

    @property
    def accesses_by_path(self) -> dict[str, int]:
        """Live access counts by key. Do not rely on insertion order."""
        return self._accesses

    @property
    def registered_errors(self) -> dict[str, ContentResponse]:
        """Live registered errors by key."""
        return self._errors

    @property
    def expectations(self) -> dict[str, ContentResponse]:
        """Live registered expectations by key."""
        return self._expectations

    def get_access_key(self, method: str | Method, path: str) -> str:
        return get_access_key(method, path)

    def get_accesses_for(self, path: str, method: str | Method = Method.GET) -> int | None:
        """Number of requests seen for *method* and *path*.

        ``None`` means the key was never requested, which is distinct from
        any count.
        """
        key = get_access_key(method, path)
        with self._lock:
            return self._accesses.get(key)

    # -- Registration --

    def register_exception(
        self,
        method: str | Method,
        url: str,
        code: int,
        body: BodySource | None = None,
        *,
        handler: ExpectationHandler | None = None,
    ) -> None:
        """Register an error reply, checked before any expectation.

        Takes the same body forms as ``expect()``; a text body is sent as the
        error message.
        """
        entry = self._build_entry(method, url, code, payload_for(body, handler))
        with self._lock:
            self._errors[get_access_key(method, entry.path)] = entry
        logger.info("Registering error: %s", entry.describe(include_body=self._log_bodies))

    register_error = register_exception

    @overload
    def expect(self, method: str | Method, url: str, code: int = ..., body: BodySource | None = ...) -> None: ...

    @overload
    def expect(self, method: str | Method, url: str, *, handler: ExpectationHandler) -> None: ...

    def expect(
        self,
        method: str | Method,
        url: str,
        code: int = 200,
        body: BodySource | None = None,
        *,
        handler: ExpectationHandler | None = None,
    ) -> None:
        """Register the reply for *method* and *url*, replacing any earlier one.

        Give a text body, a byte body (``bytes`` or a binary file object),
        a ``handler(request, response)`` callback, or nothing for a bare
        status.

        Raises:
            ConfigurationError: If both *body* and *handler* are given.
        """
        entry = self._build_entry(method, url, code, payload_for(body, handler))
        with self._lock:
            self._expectations[get_access_key(method, entry.path)] = entry
        logger.info("Registering expectation: %s", entry.describe(include_body=self._log_bodies))

    def _build_entry(self, method: str | Method, url: str, code: int, payload: Payload) -> ContentResponse:
        extracted = extract_path(url)
        if not extracted.absolute:
            logger.debug("Using %r as a literal path", url)
        return ContentResponse(
            method=str(method).upper(),
            path=extracted.path,
            code=code,
            payload=payload,
        )

    # -- Dispatch --

    async def dispatch(self, request: Request, response: Response) -> None:
        """Answer one inbound request into *response*.

        Raises:
            RoutingError: If the request target cannot be parsed.
        """
        whole_path = parse_request_path(request.target)
        key = get_access_key(request.method, whole_path)

        with self._lock:
            self._accesses[key] = self._accesses.get(key, 0) + 1
            error = self._errors.get(key)
            expectation = self._expectations.get(key) if error is None else None

        logger.debug("Looking up expectation for: %s", key)

        if error is not None:
            logger.warning("Returning registered error: %s", error.describe(include_body=self._log_bodies))
            await _send_error(error, request, response)
            return

        if expectation is not None:
            logger.info("Responding via registered expectation: %s", expectation.describe(include_body=False))
            await _send_expectation(expectation, request, response)
            return

        logger.info("No expectation registered for: %s", key)
        response.set_status(404)


async def _send_error(error: ContentResponse, request: Request, response: Response) -> None:
    match error.payload:
        case HandlerBody(handler=handler):
            await invoke(handler, request, response)
        case TextBody(text=text):
            response.send_error(error.code, text)
        case StreamBody() as stream_body:
            response.set_status(error.code)
            await response.copy_from(stream_body.open())
        case _:
            response.send_error(error.code)


async def _send_expectation(expectation: ContentResponse, request: Request, response: Response) -> None:
    match expectation.payload:
        case HandlerBody(handler=handler):
            await invoke(handler, request, response)
        case TextBody(text=text):
            response.set_status(expectation.code)
            response.write(text)
        case StreamBody() as stream_body:
            response.set_status(expectation.code)
            await response.copy_from(stream_body.open())
        case _:
            response.set_status(expectation.code)
