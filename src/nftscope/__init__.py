"""nftscope - Token standard probing, token discovery and metadata resolution for NFT contracts."""

from nftscope.chain.session import ContractSession
from nftscope.client import NftscopeClient, inspect_contract, resolve_metadata
from nftscope.core.models import (
    ContractDescriptor,
    DiscoveryResult,
    MetadataDocument,
    MintedToken,
    ProbeResult,
)
from nftscope.core.types import TokenStandard, UriScheme
from nftscope.probing.discovery import DiscoveryConfig

__version__ = "0.1.0"
__all__ = [
    # Client
    "NftscopeClient",
    "inspect_contract",
    "resolve_metadata",
    # Types
    "TokenStandard",
    "UriScheme",
    # Models
    "ContractDescriptor",
    "ContractSession",
    "DiscoveryResult",
    "MetadataDocument",
    "MintedToken",
    "ProbeResult",
    # Config
    "DiscoveryConfig",
    # Version
    "__version__",
]
