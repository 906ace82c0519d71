"""Tests for stubhttp.config — StubConfig defaults and normalization."""

import dataclasses

import pytest

from stubhttp.config import StubConfig, normalize_base_resource


class TestNormalizeBaseResource:
    def test_none_is_root(self) -> None:
        assert normalize_base_resource(None) == "/"

    def test_leading_slash_added(self) -> None:
        assert normalize_base_resource("api") == "/api"

    def test_absolute_kept(self) -> None:
        assert normalize_base_resource("/api/v1") == "/api/v1"


class TestStubConfig:
    def test_defaults(self) -> None:
        config = StubConfig()
        assert config.base_resource == "/"
        assert config.base_url == "http://testserver"
        assert config.log_bodies is True

    def test_base_resource_normalized(self) -> None:
        assert StubConfig(base_resource="api").base_resource == "/api"
        assert StubConfig(base_resource=None).base_resource == "/"

    def test_base_url_with_port(self) -> None:
        config = StubConfig(scheme="https", host="localhost", port=8443)
        assert config.base_url == "https://localhost:8443"

    def test_frozen(self) -> None:
        config = StubConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.port = 1  # type: ignore[misc]
