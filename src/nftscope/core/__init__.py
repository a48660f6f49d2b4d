"""Core types, models, and utilities."""

from .exceptions import (
    AllGatewaysExhaustedError,
    ContractCallError,
    ContractNotFoundError,
    FetchError,
    InvalidAddressError,
    MetadataError,
    MetadataTerminalError,
    NftscopeError,
    RateLimitError,
    RpcUnavailableError,
    UnsupportedURISchemeError,
)
from .models import (
    ContractDescriptor,
    DiscoveryResult,
    GatewayAttempt,
    MetadataDocument,
    MintedToken,
    ProbeResult,
    TokenId,
    ensure_token_id,
)
from .outcome import CallOutcome, attempt
from .types import ClassificationPath, ResolutionStatus, TokenStandard, UriScheme

__all__ = [
    # Types
    "ClassificationPath",
    "ResolutionStatus",
    "TokenStandard",
    "UriScheme",
    # Models
    "ContractDescriptor",
    "DiscoveryResult",
    "GatewayAttempt",
    "MetadataDocument",
    "MintedToken",
    "ProbeResult",
    "TokenId",
    "ensure_token_id",
    # Outcomes
    "CallOutcome",
    "attempt",
    # Exceptions
    "AllGatewaysExhaustedError",
    "ContractCallError",
    "ContractNotFoundError",
    "FetchError",
    "InvalidAddressError",
    "MetadataError",
    "MetadataTerminalError",
    "NftscopeError",
    "RateLimitError",
    "RpcUnavailableError",
    "UnsupportedURISchemeError",
]
