"""Stub server configuration.

StubConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


def normalize_base_resource(base_resource: str | None) -> str:
    """Return *base_resource* with a leading ``/``; ``/`` when unset."""
    if base_resource is None:
        return "/"
    if not base_resource.startswith("/"):
        return "/" + base_resource
    return base_resource


@dataclass(frozen=True, slots=True)
class StubConfig:
    """Configuration for an expectation server. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = StubConfig(base_resource="/api", port=8080)
    """

    # Routing
    base_resource: str | None = "/"

    # Address the client under test sees (in-process transport by default)
    scheme: str = "http"
    host: str = "testserver"
    port: int | None = None

    # Logging
    log_bodies: bool = True  # Include registered bodies in INFO registration logs

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_resource", normalize_base_resource(self.base_resource))

    @property
    def base_url(self) -> str:
        """``scheme://host[:port]`` with no trailing slash."""
        if self.port is None:
            return f"{self.scheme}://{self.host}"
        return f"{self.scheme}://{self.host}:{self.port}"
