"""Ordered multi-gateway fallback for content-addressed (IPFS) retrieval."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field

from nftscope.config import DEFAULT_IPFS_GATEWAYS
from nftscope.core.exceptions import AllGatewaysExhaustedError, FetchError
from nftscope.core.models import GatewayAttempt
from nftscope.core.types import ResolutionStatus
from nftscope.metadata.fetch import HttpFetcher, HttpResponse

logger = logging.getLogger(__name__)

IPFS_PREFIX = "ipfs://"


def extract_cid(uri: str) -> str:
    """Content path of an ``ipfs://`` URI without scheme or trailing slash."""
    path = uri.strip().removeprefix(IPFS_PREFIX)
    # Some contracts emit ipfs://ipfs/<cid>
    path = path.removeprefix("ipfs/")
    return path.rstrip("/")


@dataclass
class GatewayFetchResult:
    """The winning gateway's response plus every attempt made."""

    gateway: str
    response: HttpResponse
    attempts: list[GatewayAttempt] = field(default_factory=list)


class GatewayChain:
    """
    Fetches a content path through gateways one at a time, in fixed order.

    The first 2xx response wins; later gateways are never contacted. No
    gateway health is remembered between calls.
    """

    def __init__(
        self,
        fetcher: HttpFetcher,
        gateways: Sequence[str] = DEFAULT_IPFS_GATEWAYS,
        timeout: float = 10.0,
    ) -> None:
        if not gateways:
            raise ValueError("At least one gateway is required")
        self._fetcher = fetcher
        self._gateways = [g if g.endswith("/") else f"{g}/" for g in gateways]
        self.timeout = timeout

    @property
    def gateways(self) -> list[str]:
        return list(self._gateways)

    async def fetch(self, uri: str, content_path: str) -> GatewayFetchResult:
        """
        Try each gateway for ``content_path``.

        Raises:
            AllGatewaysExhaustedError: If no gateway returned a 2xx response
        """
        attempts: list[GatewayAttempt] = []

        for gateway in self._gateways:
            url = f"{gateway}{content_path}"
            logger.info(f"Trying gateway: {gateway}")
            start = time.monotonic()

            try:
                response = await self._fetcher.fetch(url, self.timeout)
            except FetchError as e:
                attempts.append(
                    GatewayAttempt(
                        gateway=gateway,
                        url=url,
                        status=ResolutionStatus.TIMEOUT if e.timed_out else ResolutionStatus.ERROR,
                        error_message=e.message,
                        duration_ms=(time.monotonic() - start) * 1000,
                    )
                )
                logger.warning(f"Failed with gateway {gateway}: {e.message}")
                continue

            duration_ms = (time.monotonic() - start) * 1000

            if not response.is_success:
                attempts.append(
                    GatewayAttempt(
                        gateway=gateway,
                        url=url,
                        status=_status_for_code(response.status_code),
                        status_code=response.status_code,
                        error_message=f"HTTP error! Status: {response.status_code}",
                        duration_ms=duration_ms,
                    )
                )
                logger.warning(f"Failed with gateway {gateway}: status {response.status_code}")
                continue

            attempts.append(
                GatewayAttempt(
                    gateway=gateway,
                    url=url,
                    status=ResolutionStatus.SUCCESS,
                    status_code=response.status_code,
                    duration_ms=duration_ms,
                )
            )
            logger.info(f"Successfully fetched from {url}")
            return GatewayFetchResult(gateway=gateway, response=response, attempts=attempts)

        raise AllGatewaysExhaustedError(uri, attempts)


def _status_for_code(status_code: int) -> ResolutionStatus:
    if status_code == 404:
        return ResolutionStatus.NOT_FOUND
    if status_code == 429:
        return ResolutionStatus.RATE_LIMITED
    return ResolutionStatus.ERROR
