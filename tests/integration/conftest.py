"""Integration test fixtures for the HTTP API."""

from __future__ import annotations

from typing import AsyncIterator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from nftscope.api.app import create_app
from nftscope.client import NftscopeClient
from nftscope.config import NftscopeSettings
from tests.fakes import FakeFetcher, FakeGateway


@pytest.fixture
def api_fetcher() -> FakeFetcher:
    """Fetcher behind the API; tests register routes on it."""
    return FakeFetcher()


@pytest.fixture
def api_gateway(erc721_gateway: FakeGateway) -> FakeGateway:
    """Gateway behind the API; defaults to the ERC-721 fake contract."""
    return erc721_gateway


@pytest.fixture
async def nftscope_client(
    test_settings: NftscopeSettings,
    api_gateway: FakeGateway,
    api_fetcher: FakeFetcher,
) -> AsyncIterator[NftscopeClient]:
    async with NftscopeClient(test_settings, gateway=api_gateway, fetcher=api_fetcher) as client:
        yield client


@pytest.fixture
async def test_app(nftscope_client: NftscopeClient) -> AsyncIterator[FastAPI]:
    """
    Create the application with a client wired to in-memory fakes.

    ASGITransport does not run the lifespan, so the client is placed in
    app state directly.
    """
    app = create_app()
    app.state.client = nftscope_client

    yield app

    app.state.client = None


@pytest.fixture
async def test_client(test_app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Create async HTTP test client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
