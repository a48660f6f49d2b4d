"""Tests for the library client."""

from __future__ import annotations

import json

import pytest

from nftscope.client import NftscopeClient
from nftscope.config import NftscopeSettings
from nftscope.core.exceptions import ContractCallError, ContractNotFoundError
from nftscope.core.types import TokenStandard, UriScheme
from nftscope.probing.discovery import DiscoveryConfig
from tests.fakes import ERC721_ADDRESS, ERC1155_ADDRESS, FakeFetcher, FakeGateway
from tests.unit.conftest import rpc_result


class TestClientLifecycle:
    """Tests for resource ownership."""

    async def test_requires_context(self, test_settings: NftscopeSettings):
        client = NftscopeClient(test_settings, gateway=FakeGateway())

        with pytest.raises(RuntimeError, match="not initialized"):
            await client.inspect_contract(ERC721_ADDRESS)

    async def test_builds_rpc_gateway_from_settings(
        self, test_settings: NftscopeSettings, respx_mock
    ):
        route = respx_mock.post("http://localhost:8545").mock(return_value=rpc_result("0x2a"))

        async with NftscopeClient(test_settings) as client:
            assert await client.get_block_number() == 42

        assert json.loads(route.calls.last.request.content)["method"] == "eth_blockNumber"

    async def test_injected_resources_survive_close(self, test_settings: NftscopeSettings):
        gateway = FakeGateway()

        async with NftscopeClient(test_settings, gateway=gateway, fetcher=FakeFetcher()) as client:
            pass

        assert await gateway.get_block_number() == 19_000_000
        with pytest.raises(RuntimeError):
            await client.get_block_number()


class TestClientOperations:
    """Tests for the high-level operations."""

    async def test_inspect_contract(
        self, test_settings: NftscopeSettings, erc721_gateway: FakeGateway
    ):
        async with NftscopeClient(test_settings, gateway=erc721_gateway) as client:
            session = await client.inspect_contract(ERC721_ADDRESS.lower())

        assert session.address == ERC721_ADDRESS
        assert session.standard == TokenStandard.ERC721
        assert session.network is not None
        assert session.network.chain_id == 1

    async def test_inspect_missing_contract(self, test_settings: NftscopeSettings):
        async with NftscopeClient(test_settings, gateway=FakeGateway(code=b"")) as client:
            with pytest.raises(ContractNotFoundError):
                await client.inspect_contract(ERC721_ADDRESS)

    async def test_discover_uses_settings(
        self, test_settings: NftscopeSettings, erc721_gateway: FakeGateway
    ):
        async with NftscopeClient(test_settings, gateway=erc721_gateway) as client:
            session = await client.inspect_contract(ERC721_ADDRESS)
            result = await client.discover_tokens(session)

        # Tokens 0-9 minted; candidates start at 1
        assert result.minted_token_ids == list(range(1, 10))
        assert result.unminted_tokens == [10]

    async def test_discover_with_config(
        self, test_settings: NftscopeSettings, erc721_gateway: FakeGateway
    ):
        async with NftscopeClient(test_settings, gateway=erc721_gateway) as client:
            session = await client.inspect_contract(ERC721_ADDRESS)
            result = await client.discover_tokens(
                session, config=DiscoveryConfig(delay=0, batch_size=5, max_attempts=5)
            )

        assert result.unminted_tokens == []

    async def test_token_checks(self, test_settings: NftscopeSettings, erc721_gateway: FakeGateway):
        async with NftscopeClient(test_settings, gateway=erc721_gateway) as client:
            session = await client.inspect_contract(ERC721_ADDRESS)

            assert await client.is_token_minted(session, "0x3") is True
            assert await client.is_token_minted(session, 77) is False

            probe = await client.probe_token(session, "5")
            assert probe.minted is True
            assert probe.uri.endswith("/5")

    async def test_erc1155_uri_template_is_expanded(
        self, test_settings: NftscopeSettings, erc1155_gateway: FakeGateway
    ):
        async with NftscopeClient(test_settings, gateway=erc1155_gateway) as client:
            session = await client.inspect_contract(ERC1155_ADDRESS)
            uri = await client.get_token_uri(session, 10)

        assert uri == f"https://api.example.com/token/{10:064x}.json"

    async def test_token_uri_revert_propagates(
        self, test_settings: NftscopeSettings, erc721_gateway: FakeGateway
    ):
        async with NftscopeClient(test_settings, gateway=erc721_gateway) as client:
            session = await client.inspect_contract(ERC721_ADDRESS)

            with pytest.raises(ContractCallError) as exc_info:
                await client.get_token_uri(session, 500)

        assert exc_info.value.indicates_nonexistent_token

    async def test_fetch_token_metadata(
        self, test_settings: NftscopeSettings, erc721_gateway: FakeGateway
    ):
        cid_path = "QmeSjSinHpPnmXmspMjwiXyN6zS4E9zccariGR3jxcaWtq/1"
        fetcher = FakeFetcher({f"https://gw-two.test/ipfs/{cid_path}": (200, '{"name": "Ape"}')})

        async with NftscopeClient(test_settings, gateway=erc721_gateway, fetcher=fetcher) as client:
            session = await client.inspect_contract(ERC721_ADDRESS)
            document = await client.fetch_token_metadata(session, 1)

        assert document.scheme == UriScheme.IPFS
        assert document.data == {"name": "Ape"}
        assert fetcher.requested == [
            f"https://gw-one.test/ipfs/{cid_path}",
            f"https://gw-two.test/ipfs/{cid_path}",
        ]

    async def test_explorer_url(self, test_settings: NftscopeSettings, erc721_gateway: FakeGateway):
        async with NftscopeClient(test_settings, gateway=erc721_gateway) as client:
            session = await client.inspect_contract(ERC721_ADDRESS)
            url = client.explorer_token_url(session, 3)

        assert url == f"https://etherscan.io/token/{ERC721_ADDRESS}?a=3"
