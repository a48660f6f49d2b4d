"""Core enums and type definitions."""

from enum import StrEnum


class TokenStandard(StrEnum):
    """Token standards a contract can be classified as."""

    ERC721 = "ERC-721"  # single owner per token id
    ERC1155 = "ERC-1155"  # balances tracked per account
    UNKNOWN = "Unknown"


class ClassificationPath(StrEnum):
    """Which probe decided a contract's standard."""

    TOKEN_URI = "token_uri"
    OWNER_OF = "owner_of"
    MULTI_TOKEN_URI = "multi_token_uri"
    FALLBACK = "fallback"


class UriScheme(StrEnum):
    """Token URI schemes the metadata resolver understands."""

    DATA_BASE64 = "data_base64"
    HTTP = "http"
    IPFS = "ipfs"
    UNSUPPORTED = "unsupported"


class ResolutionStatus(StrEnum):
    """Status of a single remote fetch attempt."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    ERROR = "error"
    TIMEOUT = "timeout"
