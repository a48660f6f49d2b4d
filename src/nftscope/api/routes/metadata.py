"""Metadata resolution endpoint."""

from __future__ import annotations

from typing import NoReturn

from fastapi import APIRouter, Query

from nftscope.api.dependencies import Client, api_error
from nftscope.api.schemas import MetadataResponse
from nftscope.core.exceptions import (
    AllGatewaysExhaustedError,
    MetadataError,
    UnsupportedURISchemeError,
)

router = APIRouter(prefix="/metadata", tags=["metadata"])


def raise_for_metadata_error(error: MetadataError) -> NoReturn:
    """Translate a metadata failure to its HTTP status."""
    if isinstance(error, UnsupportedURISchemeError):
        raise api_error(400, error, "unsupported_uri_scheme") from error
    if isinstance(error, AllGatewaysExhaustedError):
        raise api_error(502, error, "all_gateways_exhausted") from error
    raise api_error(422, error, "metadata_unreadable") from error


@router.get(
    "",
    response_model=MetadataResponse,
    operation_id="resolveMetadata",
    summary="Resolve a token URI",
    description="Resolve a data:, http(s):// or ipfs:// token URI to its metadata document.",
)
async def resolve_metadata(
    client: Client,
    uri: str = Query(..., min_length=1, description="Token URI to resolve"),
) -> MetadataResponse:
    try:
        document = await client.resolve_metadata(uri)
    except MetadataError as e:
        raise_for_metadata_error(e)

    return MetadataResponse.from_document(document)
