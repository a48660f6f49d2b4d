"""Chain access layer: method surface, JSON-RPC gateway and sessions."""

from nftscope.chain.abi import (
    ERC721_METHODS,
    ERC1155_METHODS,
    METHODS,
    ZERO_ADDRESS,
    MethodSpec,
    get_method,
    is_zero_address,
    uri_accessor,
)
from nftscope.chain.gateway import JsonRpcGateway, RemoteCallGateway, RpcConfig
from nftscope.chain.ratelimit import AsyncRateLimiter, RateLimitConfig
from nftscope.chain.session import ContractSession

__all__ = [
    # ABI
    "ERC721_METHODS",
    "ERC1155_METHODS",
    "METHODS",
    "ZERO_ADDRESS",
    "MethodSpec",
    "get_method",
    "is_zero_address",
    "uri_accessor",
    # Gateway
    "JsonRpcGateway",
    "RemoteCallGateway",
    "RpcConfig",
    # Rate limiting
    "AsyncRateLimiter",
    "RateLimitConfig",
    # Session
    "ContractSession",
]
