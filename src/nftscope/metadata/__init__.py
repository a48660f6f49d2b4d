"""Metadata layer: URI dispatch, HTTP fetching and IPFS gateway fallback."""

from nftscope.metadata.fetch import HttpFetcher, HttpResponse, HttpxFetcher
from nftscope.metadata.gateways import GatewayChain, GatewayFetchResult, extract_cid
from nftscope.metadata.resolver import (
    MetadataResolver,
    decode_base64,
    detect_scheme,
    expand_id_template,
)

__all__ = [
    # Fetching
    "HttpFetcher",
    "HttpResponse",
    "HttpxFetcher",
    # Gateways
    "GatewayChain",
    "GatewayFetchResult",
    "extract_cid",
    # Resolution
    "MetadataResolver",
    "decode_base64",
    "detect_scheme",
    "expand_id_template",
]
