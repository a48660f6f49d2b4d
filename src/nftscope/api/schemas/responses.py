"""Response schemas for API endpoints."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from nftscope.api.schemas.base import APIBaseSchema
from nftscope.core.models import ContractDescriptor, DiscoveryResult, MetadataDocument
from nftscope.core.types import ClassificationPath, ResolutionStatus, TokenStandard, UriScheme

# Token ids and supplies are serialized as decimal strings; uint256 overflows JSON numbers.


class ContractResponse(APIBaseSchema):
    """Classified contract."""

    address: str
    standard: TokenStandard
    effective_standard: TokenStandard
    classification_path: ClassificationPath
    uncertain: bool
    display_name: str | None = None
    display_symbol: str | None = None
    total_supply: str | None = None
    max_supply: str | None = None

    @classmethod
    def from_descriptor(cls, descriptor: ContractDescriptor) -> ContractResponse:
        return cls(
            address=descriptor.address,
            standard=descriptor.standard,
            effective_standard=descriptor.effective_standard,
            classification_path=descriptor.classification_path,
            uncertain=descriptor.is_uncertain,
            display_name=descriptor.display_name,
            display_symbol=descriptor.display_symbol,
            total_supply=_str_or_none(descriptor.total_supply),
            max_supply=_str_or_none(descriptor.max_supply),
        )


class MintedTokenResponse(APIBaseSchema):
    token_id: str
    uri: str


class DiscoveryResponse(APIBaseSchema):
    """Result of one discovery pass."""

    contract: ContractResponse
    minted_tokens: list[MintedTokenResponse] = Field(default_factory=list)
    unminted_tokens: list[str] = Field(default_factory=list)
    total_checked: int
    total_duration_ms: float

    @classmethod
    def from_result(
        cls,
        descriptor: ContractDescriptor,
        result: DiscoveryResult,
        duration_ms: float,
    ) -> DiscoveryResponse:
        return cls(
            contract=ContractResponse.from_descriptor(descriptor),
            minted_tokens=[
                MintedTokenResponse(token_id=str(t.token_id), uri=t.uri)
                for t in result.minted_tokens
            ],
            unminted_tokens=[str(t) for t in result.unminted_tokens],
            total_checked=result.total_checked,
            total_duration_ms=duration_ms,
        )


class TokenResponse(APIBaseSchema):
    """Existence check for one token id."""

    address: str
    standard: TokenStandard
    effective_standard: TokenStandard
    uncertain: bool
    token_id: str
    minted: bool
    uri: str | None = None
    explorer_url: str | None = None


class GatewayAttemptResponse(APIBaseSchema):
    gateway: str
    status: ResolutionStatus
    status_code: int | None = None
    error_message: str | None = None
    duration_ms: float | None = None


class MetadataResponse(APIBaseSchema):
    """Resolved metadata document."""

    uri: str
    scheme: UriScheme
    data: Any = None
    content: str | None = None
    source_url: str | None = None
    gateways_tried: list[GatewayAttemptResponse] = Field(default_factory=list)

    @classmethod
    def from_document(cls, document: MetadataDocument) -> MetadataResponse:
        return cls(
            uri=document.uri,
            scheme=document.scheme,
            data=document.data,
            content=document.content,
            source_url=document.source_url,
            gateways_tried=[
                GatewayAttemptResponse(
                    gateway=a.gateway,
                    status=a.status,
                    status_code=a.status_code,
                    error_message=a.error_message,
                    duration_ms=a.duration_ms,
                )
                for a in document.attempts
            ],
        )


class HealthResponse(APIBaseSchema):
    """Health check response."""

    status: Literal["healthy", "degraded", "unhealthy"]
    version: str
    services: dict[str, Literal["up", "down", "unknown"]]
    block_number: int | None = None


def _str_or_none(value: int | None) -> str | None:
    return None if value is None else str(value)
