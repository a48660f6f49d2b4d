"""Integration tests for API routes."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from nftscope.api.app import create_app
from tests.fakes import (
    ERC721_ADDRESS,
    ERC1155_ADDRESS,
    OWNER_ADDRESS,
    FakeFetcher,
    FakeGateway,
    answers_for,
)

pytestmark = [pytest.mark.integration]

CID_PATH = "QmeSjSinHpPnmXmspMjwiXyN6zS4E9zccariGR3jxcaWtq"


# ============================================================================
# Health Check Tests
# ============================================================================


class TestHealthEndpoint:
    """Tests for the /api/v1/health endpoint."""

    async def test_health_returns_200(self, test_client: AsyncClient):
        response = await test_client.get("/api/v1/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["services"] == {"rpc": "up"}
        assert data["blockNumber"] == 19_000_000
        assert isinstance(data["version"], str)

    async def test_health_without_client(self):
        app = create_app()
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "unhealthy"


class TestReadinessEndpoint:
    """Tests for the /api/v1/ready endpoint."""

    async def test_ready_returns_200(self, test_client: AsyncClient):
        response = await test_client.get("/api/v1/ready")

        assert response.status_code == 200
        assert response.json() == {"ready": True}

    async def test_routes_without_client_return_503(self):
        app = create_app()
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get(f"/api/v1/contracts/{ERC721_ADDRESS}")

        assert response.status_code == 503


# ============================================================================
# Contract Endpoint Tests
# ============================================================================


class TestContractEndpoint:
    """Tests for GET /api/v1/contracts/{address}."""

    async def test_classify_erc721(self, test_client: AsyncClient):
        response = await test_client.get(f"/api/v1/contracts/{ERC721_ADDRESS.lower()}")

        assert response.status_code == 200
        data = response.json()
        assert data["address"] == ERC721_ADDRESS
        assert data["standard"] == "ERC-721"
        assert data["classificationPath"] == "token_uri"
        assert data["displayName"] == "BoredApeYachtClub"
        assert data["maxSupply"] == "10000"

    async def test_invalid_address(self, test_client: AsyncClient):
        response = await test_client.get("/api/v1/contracts/0x1234")

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "invalid_address"

    @pytest.mark.parametrize("api_gateway", [FakeGateway(code=b"")])
    async def test_no_contract(self, test_client: AsyncClient):
        response = await test_client.get(f"/api/v1/contracts/{ERC721_ADDRESS}")

        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "contract_not_found"


class TestDiscoverEndpoint:
    """Tests for POST /api/v1/contracts/{address}/discover."""

    async def test_discover(self, test_client: AsyncClient):
        response = await test_client.post(f"/api/v1/contracts/{ERC721_ADDRESS}/discover")

        assert response.status_code == 200
        data = response.json()
        assert [t["tokenId"] for t in data["mintedTokens"]] == [str(i) for i in range(1, 10)]
        assert data["unmintedTokens"] == ["10"]
        assert data["contract"]["standard"] == "ERC-721"
        assert data["totalChecked"] > 0

    async def test_discover_with_overrides(self, test_client: AsyncClient):
        response = await test_client.post(
            f"/api/v1/contracts/{ERC721_ADDRESS}/discover",
            json={"delay": 0, "batchSize": 5, "maxAttempts": 5},
        )

        assert response.status_code == 200
        assert response.json()["unmintedTokens"] == []

    async def test_discover_invalid_overrides(self, test_client: AsyncClient):
        response = await test_client.post(
            f"/api/v1/contracts/{ERC721_ADDRESS}/discover",
            json={"batchSize": 0},
        )

        assert response.status_code == 422


class TestTokenEndpoint:
    """Tests for GET /api/v1/contracts/{address}/tokens/{token_id}."""

    async def test_minted_token(self, test_client: AsyncClient):
        response = await test_client.get(f"/api/v1/contracts/{ERC721_ADDRESS}/tokens/3")

        assert response.status_code == 200
        data = response.json()
        assert data["tokenId"] == "3"
        assert data["minted"] is True
        assert data["uri"] == f"ipfs://{CID_PATH}/3"
        assert data["explorerUrl"] == f"https://etherscan.io/token/{ERC721_ADDRESS}?a=3"
        assert data["standard"] == "ERC-721"
        assert data["uncertain"] is False

    @pytest.mark.parametrize(
        "api_gateway",
        [FakeGateway({"ownerOf": answers_for([5], lambda i: OWNER_ADDRESS)})],
    )
    async def test_unknown_contract_reports_uncertainty(self, test_client: AsyncClient):
        response = await test_client.get(f"/api/v1/contracts/{ERC721_ADDRESS}/tokens/5")

        assert response.status_code == 200
        data = response.json()
        assert data["standard"] == "Unknown"
        assert data["effectiveStandard"] == "ERC-721"
        assert data["uncertain"] is True
        assert data["minted"] is True

    async def test_unminted_token(self, test_client: AsyncClient):
        response = await test_client.get(f"/api/v1/contracts/{ERC721_ADDRESS}/tokens/0x64")

        assert response.status_code == 200
        data = response.json()
        assert data["tokenId"] == "100"
        assert data["minted"] is False
        assert data["uri"] is None

    async def test_invalid_token_id(self, test_client: AsyncClient):
        response = await test_client.get(f"/api/v1/contracts/{ERC721_ADDRESS}/tokens/-1")

        assert response.status_code == 400


class TestTokenMetadataEndpoint:
    """Tests for GET /api/v1/contracts/{address}/tokens/{token_id}/metadata."""

    async def test_token_metadata(self, test_client: AsyncClient, api_fetcher: FakeFetcher):
        api_fetcher.routes[f"https://gw-one.test/ipfs/{CID_PATH}/2"] = (200, '{"name": "Ape #2"}')

        response = await test_client.get(f"/api/v1/contracts/{ERC721_ADDRESS}/tokens/2/metadata")

        assert response.status_code == 200
        data = response.json()
        assert data["data"] == {"name": "Ape #2"}
        assert data["scheme"] == "ipfs"
        assert [g["status"] for g in data["gatewaysTried"]] == ["success"]

    async def test_unminted_token_metadata(self, test_client: AsyncClient):
        response = await test_client.get(f"/api/v1/contracts/{ERC721_ADDRESS}/tokens/500/metadata")

        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "token_uri_unavailable"

    async def test_gateways_exhausted(self, test_client: AsyncClient):
        response = await test_client.get(f"/api/v1/contracts/{ERC721_ADDRESS}/tokens/4/metadata")

        assert response.status_code == 502
        assert response.json()["detail"]["code"] == "all_gateways_exhausted"

    @pytest.mark.parametrize(
        "api_gateway",
        [FakeGateway({"uri": "https://api.example.com/{id}.json", "balanceOf": 1})],
    )
    async def test_erc1155_template(self, test_client: AsyncClient, api_fetcher: FakeFetcher):
        api_fetcher.routes[f"https://api.example.com/{7:064x}.json"] = (200, '{"name": "Item 7"}')

        response = await test_client.get(f"/api/v1/contracts/{ERC1155_ADDRESS}/tokens/7/metadata")

        assert response.status_code == 200
        assert response.json()["data"] == {"name": "Item 7"}


# ============================================================================
# Metadata Endpoint Tests
# ============================================================================


class TestMetadataEndpoint:
    """Tests for GET /api/v1/metadata."""

    async def test_inline_uri(self, test_client: AsyncClient, api_fetcher: FakeFetcher):
        response = await test_client.get(
            "/api/v1/metadata",
            params={"uri": "data:application/json;base64,eyJuYW1lIjoiVGVzdCJ9"},
        )

        assert response.status_code == 200
        assert response.json()["data"] == {"name": "Test"}
        assert api_fetcher.requested == []

    async def test_unsupported_uri(self, test_client: AsyncClient):
        response = await test_client.get("/api/v1/metadata", params={"uri": "ar://abc"})

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "unsupported_uri_scheme"

    async def test_unreadable_document(self, test_client: AsyncClient, api_fetcher: FakeFetcher):
        api_fetcher.routes["https://api.example.com/1"] = (500, "oops")

        response = await test_client.get(
            "/api/v1/metadata", params={"uri": "https://api.example.com/1"}
        )

        assert response.status_code == 422
        assert response.json()["detail"]["code"] == "metadata_unreadable"

    async def test_missing_uri(self, test_client: AsyncClient):
        response = await test_client.get("/api/v1/metadata")

        assert response.status_code == 422
