"""Tests for HttpClient."""

import httpx

from trackmycoin.infra.http.client import HttpClient


def _ok_transport(seen: list):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    return httpx.MockTransport(handler)


class TestHttpClient:
    async def test_get_passes_params(self):
        seen: list[httpx.Request] = []
        async with HttpClient(transport=_ok_transport(seen)) as client:
            response = await client.get("https://example.com/x", params={"a": "1"})

        assert response.json() == {"ok": True}
        assert seen[0].url.params["a"] == "1"

    async def test_close_closes_underlying_client(self):
        client = HttpClient(transport=_ok_transport([]))
        await client.close()
        assert client._client.is_closed
