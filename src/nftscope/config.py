"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_IPFS_GATEWAYS = [
    "https://ipfs.io/ipfs/",
    "https://cloudflare-ipfs.com/ipfs/",
    "https://gateway.pinata.cloud/ipfs/",
    "https://dweb.link/ipfs/",
    "https://ipfs.fleek.co/ipfs/",
]


class NetworkConfig(BaseModel):
    """A known chain: default RPC endpoint and block explorer."""

    name: str
    chain_id: int
    rpc_url: str
    block_explorer: str

    def explorer_token_url(self, address: str, token_id: int) -> str:
        return f"{self.block_explorer.rstrip('/')}/token/{address}?a={token_id}"


NETWORKS: dict[str, NetworkConfig] = {
    "ethereum": NetworkConfig(
        name="Ethereum Mainnet",
        chain_id=1,
        rpc_url="https://eth.llamarpc.com",
        block_explorer="https://etherscan.io",
    ),
    "polygon": NetworkConfig(
        name="Polygon Mainnet",
        chain_id=137,
        rpc_url="https://polygon-rpc.com",
        block_explorer="https://polygonscan.com",
    ),
    "optimism": NetworkConfig(
        name="Optimism Mainnet",
        chain_id=10,
        rpc_url="https://mainnet.optimism.io",
        block_explorer="https://optimistic.etherscan.io",
    ),
    "arbitrum": NetworkConfig(
        name="Arbitrum One",
        chain_id=42161,
        rpc_url="https://arb1.arbitrum.io/rpc",
        block_explorer="https://arbiscan.io",
    ),
    "base": NetworkConfig(
        name="Base",
        chain_id=8453,
        rpc_url="https://mainnet.base.org",
        block_explorer="https://basescan.org",
    ),
    "sepolia": NetworkConfig(
        name="Sepolia Testnet",
        chain_id=11155111,
        rpc_url="https://rpc.sepolia.org",
        block_explorer="https://sepolia.etherscan.io",
    ),
    "megaeth-testnet": NetworkConfig(
        name="MegaETH Testnet",
        chain_id=6342,
        rpc_url="https://carrot.megaeth.com/rpc",
        block_explorer="https://web3.okx.com/explorer/megaeth-testnet",
    ),
}


class NftscopeSettings(BaseSettings):
    """Application configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="NFTSCOPE_",
    )

    # Chain access
    network: str = Field(
        default="ethereum",
        description="Network preset key (see NETWORKS)",
    )
    rpc_url: str | None = Field(
        default=None,
        description="JSON-RPC endpoint; overrides the network preset's default",
    )
    rpc_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for each RPC request in seconds",
    )
    rpc_rate_limit_rps: float = Field(
        default=10.0,
        gt=0,
        description="Requests per second allowed against the RPC endpoint",
    )

    # Metadata fetching
    ipfs_gateways: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IPFS_GATEWAYS),
        description="IPFS gateway base URLs, tried in order",
    )
    gateway_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for each IPFS gateway attempt in seconds",
    )
    http_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for direct HTTP metadata requests in seconds",
    )

    # Discovery
    discovery_delay: float = Field(
        default=0.1,
        ge=0,
        description="Pause after each sampled token and between sweep batches",
    )
    discovery_batch_size: int = Field(
        default=10,
        ge=1,
        description="Concurrent existence probes per sweep batch",
    )
    discovery_max_attempts: int = Field(
        default=1000,
        ge=1,
        description="Ceiling on identifiers probed by the unminted sweep",
    )

    # App settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    @property
    def network_config(self) -> NetworkConfig | None:
        """Preset for ``network``, or None for a custom network."""
        return NETWORKS.get(self.network.lower())

    @property
    def effective_rpc_url(self) -> str:
        if self.rpc_url:
            return self.rpc_url
        if preset := self.network_config:
            return preset.rpc_url
        raise ValueError(f"Unknown network {self.network!r} and no rpc_url configured")


@lru_cache
def get_settings() -> NftscopeSettings:
    """Get cached settings instance."""
    return NftscopeSettings()
