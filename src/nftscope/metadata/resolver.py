"""Token URI to metadata document resolution."""

from __future__ import annotations

import base64
import binascii
import json
import logging
from collections.abc import Awaitable, Callable, Sequence

from nftscope.config import DEFAULT_IPFS_GATEWAYS
from nftscope.core.exceptions import (
    FetchError,
    MetadataTerminalError,
    UnsupportedURISchemeError,
)
from nftscope.core.models import MetadataDocument
from nftscope.core.types import UriScheme
from nftscope.metadata.fetch import HttpFetcher
from nftscope.metadata.gateways import IPFS_PREFIX, GatewayChain, extract_cid

logger = logging.getLogger(__name__)

INLINE_JSON_PREFIX = "data:application/json;base64,"

# Evaluated in order; first matching prefix wins
SCHEME_PREFIXES: tuple[tuple[str, UriScheme], ...] = (
    (INLINE_JSON_PREFIX, UriScheme.DATA_BASE64),
    ("http://", UriScheme.HTTP),
    ("https://", UriScheme.HTTP),
    (IPFS_PREFIX, UriScheme.IPFS),
)


def detect_scheme(uri: str) -> UriScheme:
    """Classify a token URI by prefix."""
    uri = uri.strip()
    for prefix, scheme in SCHEME_PREFIXES:
        if uri.startswith(prefix):
            return scheme
    return UriScheme.UNSUPPORTED


def decode_base64(payload: str) -> bytes:
    """Decode standard or URL-safe base64, with or without padding."""
    payload = payload.strip().replace("-", "+").replace("_", "/")
    return base64.b64decode(payload + "=" * (-len(payload) % 4))


def expand_id_template(uri: str, token_id: int) -> str:
    """Substitute the ERC-1155 ``{id}`` placeholder (64 lowercase hex digits)."""
    return uri.replace("{id}", f"{token_id:064x}")


class MetadataResolver:
    """
    Resolves token URIs to metadata documents.

    Strategies:
    - inline ``data:application/json;base64,`` payloads, decoded locally
    - direct HTTP(S) documents, one request
    - ``ipfs://`` content, fetched through an ordered gateway chain
    """

    def __init__(
        self,
        fetcher: HttpFetcher,
        *,
        gateways: Sequence[str] = DEFAULT_IPFS_GATEWAYS,
        gateway_timeout: float = 10.0,
        http_timeout: float = 30.0,
    ) -> None:
        self._fetcher = fetcher
        self._gateway_chain = GatewayChain(fetcher, gateways, gateway_timeout)
        self._http_timeout = http_timeout
        self._strategies: dict[UriScheme, Callable[[str], Awaitable[MetadataDocument]]] = {
            UriScheme.DATA_BASE64: self._resolve_inline,
            UriScheme.HTTP: self._resolve_http,
            UriScheme.IPFS: self._resolve_ipfs,
        }

    @property
    def gateway_chain(self) -> GatewayChain:
        return self._gateway_chain

    async def resolve(self, uri: str) -> MetadataDocument:
        """
        Resolve ``uri`` to a metadata document.

        Raises:
            UnsupportedURISchemeError: If no strategy handles the URI
            MetadataTerminalError: If an inline or HTTP document cannot be decoded
            AllGatewaysExhaustedError: If every IPFS gateway failed
        """
        uri = uri.strip()
        strategy = self._strategies.get(detect_scheme(uri))
        if strategy is None:
            raise UnsupportedURISchemeError(uri)
        return await strategy(uri)

    async def _resolve_inline(self, uri: str) -> MetadataDocument:
        payload = uri[len(INLINE_JSON_PREFIX):]
        try:
            data = json.loads(decode_base64(payload).decode("utf-8"))
        except (binascii.Error, UnicodeDecodeError, ValueError) as e:
            raise MetadataTerminalError(f"Invalid inline metadata: {e}", uri) from e

        return MetadataDocument(uri=uri, scheme=UriScheme.DATA_BASE64, data=data)

    async def _resolve_http(self, uri: str) -> MetadataDocument:
        try:
            response = await self._fetcher.fetch(uri, self._http_timeout)
        except FetchError as e:
            raise MetadataTerminalError(f"Metadata request failed: {e.message}", uri) from e

        if not response.is_success:
            raise MetadataTerminalError(
                f"Metadata request returned status {response.status_code}",
                uri,
                {"status_code": response.status_code},
            )

        try:
            data = json.loads(response.text)
        except ValueError as e:
            raise MetadataTerminalError(f"Metadata response is not JSON: {e}", uri) from e

        return MetadataDocument(
            uri=uri,
            scheme=UriScheme.HTTP,
            data=data,
            source_url=response.url,
        )

    async def _resolve_ipfs(self, uri: str) -> MetadataDocument:
        result = await self._gateway_chain.fetch(uri, extract_cid(uri))
        content = result.response.text

        try:
            data = json.loads(content)
        except ValueError:
            logger.info("Content is not valid JSON, returning as text")
            data = None

        return MetadataDocument(
            uri=uri,
            scheme=UriScheme.IPFS,
            data=data,
            content=content,
            source_url=result.response.url,
            attempts=tuple(result.attempts),
        )
