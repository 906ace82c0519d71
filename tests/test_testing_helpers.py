"""Tests for stubhttp.testing — in-process server over httpx and assertions."""

import io

import pytest

from stubhttp.config import StubConfig
from stubhttp.expect.router import ExpectationRouter
from stubhttp.http.request import Request
from stubhttp.http.response import Response
from stubhttp.testing import ExpectationServer, assert_accessed, assert_not_accessed


class TestAddresses:
    def test_default_base_url(self) -> None:
        server = ExpectationServer()
        assert server.base_url == "http://testserver"
        assert server.base_resource == "/"

    def test_format_url_under_base_resource(self) -> None:
        server = ExpectationServer("/api")
        assert server.format_url("widgets", "1") == "http://testserver/api/widgets/1"

    def test_format_url_with_params(self) -> None:
        server = ExpectationServer()
        assert server.format_url("search", params={"q": "x"}) == "http://testserver/search?q=x"

    def test_format_path(self) -> None:
        assert ExpectationServer("api").format_path("widgets") == "/api/widgets"
        assert ExpectationServer().format_path("widgets") == "/widgets"

    def test_config_port(self) -> None:
        server = ExpectationServer(config=StubConfig(host="127.0.0.1", port=8080))
        assert server.format_url("a") == "http://127.0.0.1:8080/a"

    def test_base_resource_overrides_config(self) -> None:
        server = ExpectationServer("/v2", config=StubConfig(base_resource="/v1", port=9000))
        assert server.base_resource == "/v2"
        assert server.config.port == 9000

    def test_client_outside_context_raises(self) -> None:
        with pytest.raises(RuntimeError, match="async with"):
            _ = ExpectationServer().client


class TestRoundTrip:
    @pytest.mark.asyncio
    async def test_text_expectation(self) -> None:
        async with ExpectationServer("/api") as server:
            server.expect("GET", server.format_url("widgets"), 200, '{"items": []}')
            response = await server.client.get(server.format_url("widgets"))

            assert response.status_code == 200
            assert response.text == '{"items": []}'
            assert server.get_accesses_for("/api/widgets") == 1

    @pytest.mark.asyncio
    async def test_registered_error(self) -> None:
        async with ExpectationServer() as server:
            server.register_exception("GET", "/widgets", 500, "boom")
            response = await server.client.get("/widgets")

            assert response.status_code == 500
            assert response.text == "boom"
            assert server.get_accesses_for("/widgets", "GET") == 1
            assert "GET /widgets" in server.registered_errors

    @pytest.mark.asyncio
    async def test_stream_body(self) -> None:
        async with ExpectationServer() as server:
            server.expect("GET", "/file.bin", 200, io.BytesIO(b"\x00\x01\x02"))
            response = await server.client.get("/file.bin")

            assert response.content == b"\x00\x01\x02"
            assert response.headers["content-length"] == "3"

    @pytest.mark.asyncio
    async def test_handler_sees_request(self) -> None:
        async def handler(request: Request, response: Response) -> None:
            payload = await request.json()
            response.set_status(201)
            response.set_content_type(request.content_type or "text/plain")
            response.add_header("X-Echo", request.headers["x-trace"])
            response.add_header("X-Url", request.url)
            response.write(f'{{"name": "{payload["name"]}"}}')

        async with ExpectationServer() as server:
            server.expect("POST", "/widgets", handler=handler)
            response = await server.client.post(
                "/widgets", params={"v": "2"}, json={"name": "gear"}, headers={"X-Trace": "t-1"}
            )

            assert response.status_code == 201
            assert response.json() == {"name": "gear"}
            assert response.headers["x-echo"] == "t-1"
            assert response.headers["x-url"] == "/widgets?v=2"
            assert response.headers["content-type"] == "application/json"

    @pytest.mark.asyncio
    async def test_unmatched_is_404_and_counted(self) -> None:
        async with ExpectationServer() as server:
            first = await server.client.get("/nope")
            second = await server.client.get("/nope?page=2")

            assert first.status_code == 404
            assert second.content == b""
            assert server.accesses_by_path == {"GET /nope": 2}

    @pytest.mark.asyncio
    async def test_percent_encoded_path_matches_decoded_registration(self) -> None:
        async with ExpectationServer() as server:
            server.expect("GET", "http://testserver/a%20b", 200, "spaced")
            response = await server.client.get("/a%20b")
            assert response.text == "spaced"


class TestAssertions:
    @pytest.mark.asyncio
    async def test_assert_accessed(self) -> None:
        async with ExpectationServer() as server:
            await server.client.get("/a")
            await server.client.get("/a")
            assert_accessed(server.router, "/a")
            assert_accessed(server.router, "/a", times=2)

    def test_assert_accessed_fails_when_untouched(self) -> None:
        router = ExpectationRouter()
        with pytest.raises(AssertionError, match="never was"):
            assert_accessed(router, "/a")

    @pytest.mark.asyncio
    async def test_assert_accessed_wrong_count(self) -> None:
        async with ExpectationServer() as server:
            await server.client.post("/a")
            assert_accessed(server.router, "/a", method="POST", times=1)
            with pytest.raises(AssertionError, match="requested 3 time"):
                assert_accessed(server.router, "/a", method="POST", times=3)

    def test_assert_not_accessed(self) -> None:
        assert_not_accessed(ExpectationRouter(), "/a")
