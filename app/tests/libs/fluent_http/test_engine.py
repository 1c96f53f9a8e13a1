import httpx
import pytest

from libs.fluent_http import HttpEngine, Request


class TestDefaultHeaders:
    def test_add_header(self):
        engine = HttpEngine()
        engine.add_header("Authorization", "Bearer X")
        assert engine.default_headers == {"Authorization": "Bearer X"}

    def test_add_header_overwrites(self):
        engine = HttpEngine()
        engine.add_header("Authorization", "Bearer X")
        engine.add_header("Authorization", "Bearer Z")
        assert engine.default_headers == {"Authorization": "Bearer Z"}

    def test_remove_header(self):
        engine = HttpEngine()
        engine.add_header("Authorization", "Bearer X")
        engine.remove_header("Authorization")
        assert engine.default_headers == {}

    def test_remove_missing_header_is_noop(self):
        engine = HttpEngine()
        engine.add_header("Accept", "*/*")
        engine.remove_header("Authorization")
        assert engine.default_headers == {"Accept": "*/*"}

    def test_default_headers_returns_copy(self):
        engine = HttpEngine()
        engine.default_headers["X"] = "1"
        assert engine.default_headers == {}


class TestMake:
    def test_make_returns_request(self):
        engine = HttpEngine()
        request = engine.make("https://api.example.com")
        assert isinstance(request, Request)
        assert request.url == "https://api.example.com"

    def test_request_overrides_engine_header(self):
        engine = HttpEngine()
        engine.add_header("Authorization", "Bearer X")
        request = engine.make("https://api.example.com").set_header("Authorization", "Bearer Y")
        assert request.get_all_headers()["Authorization"] == "Bearer Y"

    def test_later_engine_changes_apply(self):
        engine = HttpEngine()
        request = engine.make("https://api.example.com")
        engine.add_header("X-Tenant", "acme")
        assert request.get_all_headers() == {"X-Tenant": "acme"}


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_injected_client_left_open(self):
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        async with HttpEngine(client):
            pass
        assert client.is_closed is False
        await client.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_closed(self):
        engine = HttpEngine()
        async with engine:
            client = engine._transport._client
            assert client is not None
        assert client.is_closed is True
