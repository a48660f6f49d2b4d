"""Custom exception hierarchy for nftscope."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from nftscope.core.models import GatewayAttempt


class NftscopeError(Exception):
    """Base exception for all nftscope errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidAddressError(NftscopeError):
    """The given string is not a well-formed contract address."""

    def __init__(self, address: str) -> None:
        super().__init__(f"Invalid contract address format: {address!r}", {"address": address})
        self.address = address


class ContractNotFoundError(NftscopeError):
    """No executable code is deployed at the address."""

    def __init__(self, address: str) -> None:
        super().__init__(f"No contract found at {address}", {"address": address})
        self.address = address


class ContractCallError(NftscopeError):
    """A read-only contract call failed (revert, empty return, decode error)."""

    def __init__(
        self,
        message: str,
        method: str | None = None,
        address: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.method = method
        self.address = address

    @property
    def indicates_nonexistent_token(self) -> bool:
        """Whether the revert reason says the token was never minted."""
        return "nonexistent token" in self.message.lower()


class RpcUnavailableError(ContractCallError):
    """The RPC endpoint could not be reached or answered with a server error."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        method: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, method=method, details=details)
        self.status_code = status_code


class RateLimitError(ContractCallError):
    """The RPC endpoint kept answering 429 after all retries."""

    def __init__(
        self,
        message: str,
        retry_after: float | None = None,
        method: str | None = None,
    ) -> None:
        super().__init__(message, method=method)
        self.retry_after = retry_after


class FetchError(NftscopeError):
    """An HTTP fetch failed before a response was received."""

    def __init__(self, message: str, url: str, *, timed_out: bool = False) -> None:
        super().__init__(message, {"url": url})
        self.url = url
        self.timed_out = timed_out


class MetadataError(NftscopeError):
    """Base class for metadata resolution failures."""

    def __init__(self, message: str, uri: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details)
        self.uri = uri


class MetadataTerminalError(MetadataError):
    """The document was located but could not be decoded. Not retried."""


class UnsupportedURISchemeError(MetadataError):
    """The token URI uses a scheme no strategy handles."""

    def __init__(self, uri: str) -> None:
        super().__init__(f"Unsupported URI format: {uri[:64]}", uri)


class AllGatewaysExhaustedError(MetadataError):
    """Every content gateway failed for a content-addressed URI."""

    def __init__(self, uri: str, attempts: list[GatewayAttempt]) -> None:
        super().__init__(
            f"All IPFS gateways failed ({len(attempts)} tried)",
            uri,
            {"gateways": [a.gateway for a in attempts]},
        )
        self.attempts = attempts
