"""Contract classification, discovery and token endpoints."""

from __future__ import annotations

import time

from fastapi import APIRouter, HTTPException

from nftscope.api.dependencies import Client, api_error
from nftscope.api.routes.metadata import raise_for_metadata_error
from nftscope.api.schemas import (
    ContractResponse,
    DiscoverRequest,
    DiscoveryResponse,
    MetadataResponse,
    TokenResponse,
)
from nftscope.chain.session import ContractSession
from nftscope.client import NftscopeClient
from nftscope.core.exceptions import (
    ContractCallError,
    ContractNotFoundError,
    InvalidAddressError,
    MetadataError,
)
from nftscope.core.models import ensure_token_id
from nftscope.probing.discovery import DiscoveryConfig

router = APIRouter(prefix="/contracts", tags=["contracts"])


async def _open_session(client: NftscopeClient, address: str) -> ContractSession:
    try:
        return await client.inspect_contract(address)
    except InvalidAddressError as e:
        raise api_error(400, e, "invalid_address") from e
    except ContractNotFoundError as e:
        raise api_error(404, e, "contract_not_found") from e
    except ContractCallError as e:
        raise api_error(502, e, "rpc_unavailable") from e


def _parse_token_id(token_id: str) -> int:
    try:
        return ensure_token_id(token_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid token id: {token_id}") from e


@router.get(
    "/{address}",
    response_model=ContractResponse,
    operation_id="getContract",
    summary="Classify a contract",
    description="Probe the contract to determine its token standard and descriptive fields.",
)
async def get_contract(address: str, client: Client) -> ContractResponse:
    session = await _open_session(client, address)
    return ContractResponse.from_descriptor(session.descriptor)


@router.post(
    "/{address}/discover",
    response_model=DiscoveryResponse,
    operation_id="discoverTokens",
    summary="Discover token ids",
    description="Sample likely minted token ids and sweep for the first free one.",
)
async def discover_tokens(
    address: str,
    client: Client,
    request: DiscoverRequest | None = None,
) -> DiscoveryResponse:
    """Run one discovery pass against the contract."""
    start_time = time.monotonic()
    session = await _open_session(client, address)

    config = DiscoveryConfig.from_settings(client.settings)
    if request is not None:
        config = request.apply(config)

    result = await client.discover_tokens(session, config=config)

    return DiscoveryResponse.from_result(
        session.descriptor,
        result,
        (time.monotonic() - start_time) * 1000,
    )


@router.get(
    "/{address}/tokens/{token_id}",
    response_model=TokenResponse,
    operation_id="getToken",
    summary="Check a token id",
    description="Report whether the token id is minted, with its URI when it is.",
)
async def get_token(address: str, token_id: str, client: Client) -> TokenResponse:
    parsed_id = _parse_token_id(token_id)
    session = await _open_session(client, address)
    probe = await client.probe_token(session, parsed_id)

    return TokenResponse(
        address=session.address,
        standard=session.descriptor.standard,
        effective_standard=session.standard,
        uncertain=session.descriptor.is_uncertain,
        token_id=str(parsed_id),
        minted=probe.minted,
        uri=probe.uri,
        explorer_url=client.explorer_token_url(session, parsed_id),
    )


@router.get(
    "/{address}/tokens/{token_id}/metadata",
    response_model=MetadataResponse,
    operation_id="getTokenMetadata",
    summary="Fetch token metadata",
    description="Read the token URI from the contract and resolve it to a document.",
)
async def get_token_metadata(address: str, token_id: str, client: Client) -> MetadataResponse:
    parsed_id = _parse_token_id(token_id)
    session = await _open_session(client, address)

    try:
        uri = await client.get_token_uri(session, parsed_id)
    except ContractCallError as e:
        raise api_error(404, e, "token_uri_unavailable") from e

    try:
        document = await client.resolve_metadata(uri)
    except MetadataError as e:
        raise_for_metadata_error(e)

    return MetadataResponse.from_document(document)
