"""API schema definitions."""

from nftscope.api.schemas.base import APIBaseSchema, ErrorDetail
from nftscope.api.schemas.requests import DiscoverRequest
from nftscope.api.schemas.responses import (
    ContractResponse,
    DiscoveryResponse,
    GatewayAttemptResponse,
    HealthResponse,
    MetadataResponse,
    MintedTokenResponse,
    TokenResponse,
)

__all__ = [
    # Base
    "APIBaseSchema",
    "ErrorDetail",
    # Requests
    "DiscoverRequest",
    # Responses
    "ContractResponse",
    "DiscoveryResponse",
    "GatewayAttemptResponse",
    "HealthResponse",
    "MetadataResponse",
    "MintedTokenResponse",
    "TokenResponse",
]
