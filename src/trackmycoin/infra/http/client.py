import httpx


class HttpClient:
    """Async HTTP client shared by all oracle calls. Callers pace themselves."""

    def __init__(self, timeout: float = 30.0, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def get(self, url: str, params: dict | None = None) -> httpx.Response:
        return await self._client.get(url, params=params)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
