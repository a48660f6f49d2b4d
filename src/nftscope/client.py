"""Main library client for standalone usage."""

from __future__ import annotations

import logging

from nftscope.chain.gateway import JsonRpcGateway, RemoteCallGateway, RpcConfig
from nftscope.chain.ratelimit import RateLimitConfig
from nftscope.chain.session import ContractSession
from nftscope.config import NftscopeSettings
from nftscope.core.models import DiscoveryResult, MetadataDocument, ProbeResult, ensure_token_id
from nftscope.core.types import TokenStandard
from nftscope.metadata.fetch import HttpFetcher, HttpxFetcher
from nftscope.metadata.resolver import MetadataResolver, expand_id_template
from nftscope.probing.classifier import ContractClassifier
from nftscope.probing.discovery import DiscoveryConfig, TokenDiscoveryEngine
from nftscope.probing.existence import TokenExistenceProber

logger = logging.getLogger(__name__)


class NftscopeClient:
    """
    Main client for the nftscope library.

    Usage:
        async with NftscopeClient() as client:
            session = await client.inspect_contract("0xBC4CA0EdA7647A8aB7C2061c2E118A18a936f13D")
            discovery = await client.discover_tokens(session)
            metadata = await client.fetch_token_metadata(session, discovery.minted_token_ids[0])

    Settings are loaded from environment variables or can be passed explicitly.
    A gateway or fetcher passed in is used as-is and not closed by the client.
    """

    def __init__(
        self,
        settings: NftscopeSettings | None = None,
        *,
        gateway: RemoteCallGateway | None = None,
        fetcher: HttpFetcher | None = None,
    ) -> None:
        self._settings = settings or NftscopeSettings()
        self._gateway = gateway
        self._fetcher = fetcher
        self._owns_gateway = gateway is None
        self._owns_fetcher = fetcher is None
        self._resolver: MetadataResolver | None = None
        self._prober = TokenExistenceProber()

    async def __aenter__(self) -> NftscopeClient:
        """Initialize resources on context entry."""
        await self._initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Clean up resources on context exit."""
        await self.close()

    async def _initialize(self) -> None:
        if self._gateway is None:
            rpc_url = self._settings.effective_rpc_url
            logger.info(f"Connecting to RPC endpoint {rpc_url}")
            self._gateway = JsonRpcGateway(
                RpcConfig(
                    url=rpc_url,
                    timeout=self._settings.rpc_timeout,
                    rate_limit=RateLimitConfig(
                        requests_per_second=self._settings.rpc_rate_limit_rps,
                        burst_size=max(1, int(self._settings.rpc_rate_limit_rps)),
                    ),
                )
            )

        if self._fetcher is None:
            self._fetcher = HttpxFetcher()

        self._resolver = MetadataResolver(
            self._fetcher,
            gateways=self._settings.ipfs_gateways,
            gateway_timeout=self._settings.gateway_timeout,
            http_timeout=self._settings.http_timeout,
        )

    async def close(self) -> None:
        """Close all resources the client created."""
        if self._owns_gateway and isinstance(self._gateway, JsonRpcGateway):
            await self._gateway.close()
            self._gateway = None

        if self._owns_fetcher and isinstance(self._fetcher, HttpxFetcher):
            await self._fetcher.close()
            self._fetcher = None

        self._resolver = None

    def _ensure_initialized(self) -> None:
        if self._gateway is None or self._resolver is None:
            raise RuntimeError(
                "Client not initialized. Use 'async with NftscopeClient() as client:'"
            )

    @property
    def settings(self) -> NftscopeSettings:
        return self._settings

    async def get_block_number(self) -> int:
        """Current block of the connected chain."""
        self._ensure_initialized()
        return await self._gateway.get_block_number()

    async def inspect_contract(self, address: str) -> ContractSession:
        """
        Classify a contract and open a session for it.

        Raises:
            InvalidAddressError: If the address is malformed
            ContractNotFoundError: If no code is deployed at the address
        """
        self._ensure_initialized()
        descriptor = await ContractClassifier(self._gateway).classify(address)
        return ContractSession(
            gateway=self._gateway,
            descriptor=descriptor,
            network=self._settings.network_config,
        )

    async def discover_tokens(
        self,
        session: ContractSession,
        *,
        config: DiscoveryConfig | None = None,
    ) -> DiscoveryResult:
        """Sample minted ids and sweep for a free one."""
        engine = TokenDiscoveryEngine(
            self._prober,
            config or DiscoveryConfig.from_settings(self._settings),
        )
        return await engine.discover(session)

    async def is_token_minted(self, session: ContractSession, token_id: int | str) -> bool:
        return await self._prober.is_minted(session, ensure_token_id(token_id))

    async def probe_token(self, session: ContractSession, token_id: int | str) -> ProbeResult:
        return await self._prober.probe(session, ensure_token_id(token_id))

    async def get_token_uri(self, session: ContractSession, token_id: int | str) -> str:
        """
        Read a token's metadata URI.

        Raises:
            ContractCallError: If the accessor reverts (e.g. unminted token)
        """
        token_id = ensure_token_id(token_id)
        uri = await session.token_uri(token_id)
        if session.standard == TokenStandard.ERC1155:
            uri = expand_id_template(uri, token_id)
        return uri

    async def resolve_metadata(self, uri: str) -> MetadataDocument:
        """Resolve a token URI to its metadata document."""
        self._ensure_initialized()
        return await self._resolver.resolve(uri)

    async def fetch_token_metadata(
        self,
        session: ContractSession,
        token_id: int | str,
    ) -> MetadataDocument:
        """Read the token URI and resolve it."""
        uri = await self.get_token_uri(session, token_id)
        return await self.resolve_metadata(uri)

    def explorer_token_url(self, session: ContractSession, token_id: int | str) -> str | None:
        """Block explorer page for the token, when the network is a known preset."""
        return session.explorer_token_url(ensure_token_id(token_id))


# Convenience functions for one-off lookups
async def inspect_contract(
    address: str,
    *,
    settings: NftscopeSettings | None = None,
) -> ContractSession:
    """
    Classify a contract (convenience function).

    The returned session's gateway is closed on return; use NftscopeClient
    to keep making calls through it.
    """
    async with NftscopeClient(settings) as client:
        return await client.inspect_contract(address)


async def resolve_metadata(
    uri: str,
    *,
    settings: NftscopeSettings | None = None,
) -> MetadataDocument:
    """Resolve a token URI (convenience function)."""
    async with NftscopeClient(settings) as client:
        return await client.resolve_metadata(uri)
