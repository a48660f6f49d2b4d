"""Remote call gateway: read-only contract access over Ethereum JSON-RPC."""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections.abc import Sequence
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Protocol, runtime_checkable

import httpx
from eth_abi.exceptions import DecodingError, EncodingError
from eth_utils import decode_hex, encode_hex, is_address
from pydantic import BaseModel, Field

from nftscope.chain.abi import get_method
from nftscope.chain.ratelimit import AsyncRateLimiter, RateLimitConfig
from nftscope.core.exceptions import ContractCallError, RateLimitError, RpcUnavailableError

logger = logging.getLogger(__name__)


@runtime_checkable
class RemoteCallGateway(Protocol):
    """Read-only access to contracts on one connected chain."""

    async def invoke(self, address: str, method: str, args: Sequence[Any] = ()) -> Any:
        """Call a view method. Raises ContractCallError on any failure."""
        ...

    async def get_code(self, address: str) -> bytes:
        """Return the deployed bytecode (empty when there is none)."""
        ...

    def is_valid_address(self, address: str) -> bool:
        ...

    async def get_block_number(self) -> int:
        ...


class RpcConfig(BaseModel):
    """Configuration for a JSON-RPC gateway."""

    url: str
    timeout: float = 30.0
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    block_tag: str = "latest"


class JsonRpcGateway:
    """
    RemoteCallGateway backed by an Ethereum JSON-RPC endpoint.

    Provides:
    - ABI encoding/decoding of the fixed method surface
    - Shared rate limiting with 429 handling
    - Mapping of reverts and transport failures to ContractCallError
    """

    def __init__(self, config: RpcConfig) -> None:
        self.config = config
        self._client: httpx.AsyncClient | None = None
        self._rate_limiter = AsyncRateLimiter(config.rate_limit)
        self._ids = itertools.count(1)

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Get or create HTTP client with proper lifecycle."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.timeout),
                headers={
                    "User-Agent": "nftscope/0.1",
                    "Content-Type": "application/json",
                },
            )

        try:
            yield self._client
        except httpx.HTTPError as e:
            raise RpcUnavailableError(f"HTTP error: {e}") from e

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _rpc(self, method: str, params: list[Any]) -> Any:
        """Send one JSON-RPC request with rate limiting and 429 handling."""
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }

        await self._rate_limiter.acquire()

        async with self._get_client() as client:
            while True:
                response = await client.post(self.config.url, json=payload)

                if response.status_code != 429:
                    self._rate_limiter.reset_429_state()
                    break

                retry_after = response.headers.get("Retry-After")
                if not self._rate_limiter.should_retry_429:
                    raise RateLimitError(
                        "RPC rate limit exceeded",
                        retry_after=float(retry_after) if retry_after else None,
                        method=method,
                    )
                wait_time = self._rate_limiter.handle_429(
                    float(retry_after) if retry_after else None
                )
                logger.warning(f"RPC rate limited on {method}, retrying in {wait_time:.1f}s")
                await asyncio.sleep(wait_time)

        if response.status_code >= 500:
            raise RpcUnavailableError(
                f"RPC endpoint returned {response.status_code}",
                status_code=response.status_code,
                method=method,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise RpcUnavailableError(
                f"RPC endpoint returned non-JSON body (status {response.status_code})",
                status_code=response.status_code,
                method=method,
            ) from e

        if error := body.get("error"):
            raise ContractCallError(
                error.get("message", "JSON-RPC error"),
                method=method,
                details={"code": error.get("code"), "data": error.get("data")},
            )
        if "result" not in body:
            raise RpcUnavailableError("JSON-RPC response has no result", method=method)
        return body["result"]

    async def invoke(self, address: str, method: str, args: Sequence[Any] = ()) -> Any:
        """Call a view method and decode its return value."""
        spec = get_method(method)

        try:
            calldata = spec.encode_call(args)
        except EncodingError as e:
            raise ContractCallError(
                f"Cannot encode arguments for {spec.signature}: {e}",
                method=method,
                address=address,
            ) from e

        try:
            result = await self._rpc(
                "eth_call",
                [{"to": address, "data": encode_hex(calldata)}, self.config.block_tag],
            )
        except ContractCallError as e:
            e.method, e.address = method, address
            raise

        data = decode_hex(result or "0x")
        if not data:
            # Missing functions without a fallback return nothing rather than reverting
            raise ContractCallError("empty return data", method=method, address=address)

        try:
            return spec.decode_result(data)
        except (DecodingError, UnicodeDecodeError) as e:
            raise ContractCallError(
                f"Cannot decode {spec.signature} result: {e}",
                method=method,
                address=address,
            ) from e

    async def get_code(self, address: str) -> bytes:
        result = await self._rpc("eth_getCode", [address, self.config.block_tag])
        if result in (None, "0x", "0x0"):
            return b""
        return decode_hex(result)

    def is_valid_address(self, address: str) -> bool:
        return is_address(address)

    async def get_block_number(self) -> int:
        result = await self._rpc("eth_blockNumber", [])
        return int(result, 16)

    async def __aenter__(self) -> JsonRpcGateway:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
