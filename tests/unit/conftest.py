"""Unit test fixtures with HTTP mocking."""

from __future__ import annotations

from typing import Any

import pytest
import respx
from eth_abi import encode
from eth_utils import encode_hex
from httpx import Response

from nftscope.chain.gateway import JsonRpcGateway, RpcConfig
from nftscope.chain.ratelimit import RateLimitConfig

RPC_URL = "http://rpc.test"


# ============================================================================
# HTTP Mocking Fixtures
# ============================================================================


@pytest.fixture
def respx_mock():
    """Provide a respx mock router for HTTP mocking.

    Use this when you need fine-grained control over mocked responses.
    The mock is automatically started and stopped by respx.
    """
    with respx.mock(assert_all_called=False) as router:
        yield router


# ============================================================================
# Gateway Configuration Fixtures
# ============================================================================


@pytest.fixture
def rpc_config() -> RpcConfig:
    """Create an RPC config for testing."""
    return RpcConfig(
        url=RPC_URL,
        timeout=5.0,
        rate_limit=RateLimitConfig(
            requests_per_second=1000.0,  # High limit for tests
            burst_size=100,
            retry_on_429=True,
            max_429_retries=2,
            base_backoff=0.0,
        ),
    )


@pytest.fixture
async def rpc_gateway(rpc_config: RpcConfig):
    """JSON-RPC gateway pointed at the mocked endpoint."""
    async with JsonRpcGateway(rpc_config) as gateway:
        yield gateway


# ============================================================================
# Mock Response Helpers
# ============================================================================


def rpc_result(result: Any, request_id: int = 1) -> Response:
    """Create a successful JSON-RPC response."""
    return Response(
        status_code=200,
        json={"jsonrpc": "2.0", "id": request_id, "result": result},
    )


def rpc_call_result(types: list[str], values: list[Any]) -> Response:
    """Create an eth_call response carrying ABI-encoded return values."""
    return rpc_result(encode_hex(encode(types, values)))


def rpc_error(message: str, code: int = 3, data: str | None = None) -> Response:
    """Create a JSON-RPC error response (e.g. a revert)."""
    error: dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return Response(
        status_code=200,
        json={"jsonrpc": "2.0", "id": 1, "error": error},
    )


def mock_rate_limit_response(retry_after: int = 0) -> Response:
    """Create a mock 429 rate limit response."""
    return Response(
        status_code=429,
        json={"error": "Rate limit exceeded"},
        headers={"Retry-After": str(retry_after)},
    )
