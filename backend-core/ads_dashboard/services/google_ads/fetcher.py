"""HTTP fetch of the published Google Ads sheet export, with typed failures."""
import httpx


class GoogleAdsFetchError(Exception):
    pass


class GoogleAdsHTTPError(GoogleAdsFetchError):
    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"Failed to fetch data (HTTP {status_code})")


class GoogleAdsNetworkError(GoogleAdsFetchError):
    pass


class GoogleAdsCSVFetcher:
    """Single-shot GET of the published sheet export. No retries."""

    def __init__(self, timeout: float = 30.0, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_csv(self, url: str) -> str:
        try:
            response = await self._client.get(url, headers={"Accept": "text/csv"})
        except httpx.HTTPError as exc:
            detail = str(exc) or exc.__class__.__name__
            raise GoogleAdsNetworkError(f"Failed to fetch data: {detail}") from exc

        if response.status_code < 200 or response.status_code >= 300:
            raise GoogleAdsHTTPError(response.status_code)

        return response.text
