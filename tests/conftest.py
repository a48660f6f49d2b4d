"""Shared test fixtures for all tests."""

from __future__ import annotations

import pytest

from nftscope.chain.session import ContractSession
from nftscope.config import NETWORKS, NftscopeSettings
from nftscope.core.models import ContractDescriptor
from nftscope.core.types import ClassificationPath, TokenStandard
from tests.fakes import (
    ERC721_ADDRESS,
    ERC1155_ADDRESS,
    OWNER_ADDRESS,
    FakeFetcher,
    FakeGateway,
    answers_for,
)


# ============================================================================
# Gateway Fixtures
# ============================================================================


@pytest.fixture
def erc721_gateway() -> FakeGateway:
    """A BAYC-like contract with tokens 0-9 minted."""
    minted = range(10)
    return FakeGateway(
        {
            "name": "BoredApeYachtClub",
            "symbol": "BAYC",
            "totalSupply": 10,
            "MAX_SUPPLY": 10_000,
            "tokenURI": answers_for(
                minted, lambda i: f"ipfs://QmeSjSinHpPnmXmspMjwiXyN6zS4E9zccariGR3jxcaWtq/{i}"
            ),
            "ownerOf": answers_for(minted, lambda i: OWNER_ADDRESS),
        }
    )


@pytest.fixture
def erc1155_gateway() -> FakeGateway:
    """A multi-token contract with ids 1-3 touched."""
    touched = {1, 2, 3}
    return FakeGateway(
        {
            "uri": "https://api.example.com/token/{id}.json",
            "balanceOf": lambda account, token_id: 5 if token_id in touched else 0,
        }
    )


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()


# ============================================================================
# Session Fixtures
# ============================================================================


@pytest.fixture
def erc721_descriptor() -> ContractDescriptor:
    return ContractDescriptor(
        address=ERC721_ADDRESS,
        standard=TokenStandard.ERC721,
        classification_path=ClassificationPath.TOKEN_URI,
        display_name="BoredApeYachtClub",
        display_symbol="BAYC",
        total_supply=10,
        max_supply=10_000,
    )


@pytest.fixture
def erc1155_descriptor() -> ContractDescriptor:
    return ContractDescriptor(
        address=ERC1155_ADDRESS,
        standard=TokenStandard.ERC1155,
        classification_path=ClassificationPath.MULTI_TOKEN_URI,
    )


@pytest.fixture
def erc721_session(
    erc721_gateway: FakeGateway,
    erc721_descriptor: ContractDescriptor,
) -> ContractSession:
    return ContractSession(
        gateway=erc721_gateway,
        descriptor=erc721_descriptor,
        network=NETWORKS["ethereum"],
    )


@pytest.fixture
def erc1155_session(
    erc1155_gateway: FakeGateway,
    erc1155_descriptor: ContractDescriptor,
) -> ContractSession:
    return ContractSession(gateway=erc1155_gateway, descriptor=erc1155_descriptor)


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def test_settings() -> NftscopeSettings:
    """Settings for testing, independent of the environment."""
    return NftscopeSettings(
        _env_file=None,
        network="ethereum",
        rpc_url="http://localhost:8545",
        ipfs_gateways=["https://gw-one.test/ipfs/", "https://gw-two.test/ipfs/"],
        discovery_delay=0.0,
        discovery_batch_size=10,
        discovery_max_attempts=100,
        log_level="DEBUG",
    )
