"""HTTP fetch capability used for metadata documents and gateway attempts."""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Protocol, runtime_checkable

import httpx

from nftscope.core.exceptions import FetchError


@dataclass(frozen=True)
class HttpResponse:
    """Status and decoded body of one fetch."""

    url: str
    status_code: int
    text: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


@runtime_checkable
class HttpFetcher(Protocol):
    async def fetch(self, url: str, timeout: float) -> HttpResponse:
        """GET ``url`` within ``timeout`` seconds. Raises FetchError on transport failure."""
        ...


class HttpxFetcher:
    """HttpFetcher backed by a shared httpx.AsyncClient."""

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self._client = client
        self._owns_client = client is None

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={
                    "User-Agent": "nftscope/0.1",
                    "Accept": "application/json, text/plain, */*",
                },
                follow_redirects=True,
            )
            self._owns_client = True
        yield self._client

    async def fetch(self, url: str, timeout: float) -> HttpResponse:
        async with self._get_client() as client:
            try:
                response = await client.get(url, timeout=httpx.Timeout(timeout))
            except httpx.TimeoutException as e:
                raise FetchError(f"Timed out after {timeout}s", url, timed_out=True) from e
            except httpx.HTTPError as e:
                raise FetchError(f"HTTP error: {e}", url) from e

        return HttpResponse(url=url, status_code=response.status_code, text=response.text)

    async def close(self) -> None:
        if self._owns_client and self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
