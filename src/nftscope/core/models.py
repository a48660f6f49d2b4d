"""Domain models for contracts, tokens and metadata."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

from .types import ClassificationPath, ResolutionStatus, TokenStandard, UriScheme

# Token ids are unbounded Python ints; never floats.
TokenId = Annotated[int, Field(ge=0, strict=True)]


def ensure_token_id(value: int | str) -> int:
    """Coerce a token id given as int or decimal/hex string.

    Raises:
        ValueError: If the value is negative, a bool, or not an integer literal.
    """
    if isinstance(value, bool):
        raise ValueError("Token id must be an integer, not a bool")
    if isinstance(value, str):
        text = value.strip()
        token_id = int(text, 16) if text.lower().startswith("0x") else int(text, 10)
    elif isinstance(value, int):
        token_id = value
    else:
        raise ValueError(f"Token id must be an integer, got {type(value).__name__}")
    if token_id < 0:
        raise ValueError(f"Token id must be non-negative, got {token_id}")
    return token_id


class ContractDescriptor(BaseModel):
    """What classification learned about a contract.

    Built once per contract session and never re-evaluated.
    """

    model_config = ConfigDict(frozen=True)

    address: str = Field(..., description="Checksummed contract address")
    standard: TokenStandard = Field(..., description="Standard inferred by probing")
    classification_path: ClassificationPath = Field(
        default=ClassificationPath.FALLBACK, description="Probe that decided the standard"
    )
    display_name: str | None = Field(default=None, description="Result of name()")
    display_symbol: str | None = Field(default=None, description="Result of symbol()")
    total_supply: int | None = Field(default=None, ge=0, description="Result of totalSupply()")
    max_supply: int | None = Field(default=None, ge=0, description="maxSupply() or MAX_SUPPLY()")

    @property
    def effective_standard(self) -> TokenStandard:
        """Standard used for follow-up calls; unknown contracts are treated as ERC-721."""
        if self.standard == TokenStandard.UNKNOWN:
            return TokenStandard.ERC721
        return self.standard

    @property
    def is_uncertain(self) -> bool:
        return self.standard == TokenStandard.UNKNOWN


class ProbeResult(BaseModel):
    """Outcome of checking one token id."""

    model_config = ConfigDict(frozen=True)

    token_id: TokenId
    minted: bool
    uri: str | None = None


class MintedToken(BaseModel):
    """A token id whose URI accessor answered."""

    model_config = ConfigDict(frozen=True)

    token_id: TokenId
    uri: str


class DiscoveryResult(BaseModel):
    """Partial inventory produced by one discovery pass."""

    minted_tokens: list[MintedToken] = Field(default_factory=list)
    unminted_tokens: list[TokenId] = Field(default_factory=list)
    total_checked: int = Field(default=0, ge=0)

    @property
    def minted_token_ids(self) -> list[int]:
        return [t.token_id for t in self.minted_tokens]

    @property
    def unminted_token_id(self) -> int | None:
        """The free token id found by the sweep, if any."""
        return self.unminted_tokens[0] if self.unminted_tokens else None


class GatewayAttempt(BaseModel):
    """One try against one content gateway."""

    model_config = ConfigDict(frozen=True)

    gateway: str
    url: str
    status: ResolutionStatus
    status_code: int | None = None
    error_message: str | None = None
    duration_ms: float = 0.0


class MetadataDocument(BaseModel):
    """A resolved token metadata document.

    ``data`` holds the parsed JSON when the payload parsed; ``content`` holds
    the raw text for content-addressed fetches. A document is either fully
    parsed or opaque text, never partially applied.
    """

    model_config = ConfigDict(frozen=True)

    uri: str
    scheme: UriScheme
    data: Any = None
    content: str | None = None
    source_url: str | None = None
    attempts: tuple[GatewayAttempt, ...] = ()

    @property
    def is_json(self) -> bool:
        return self.data is not None

    @property
    def value(self) -> Any:
        """Parsed document when available, raw text otherwise."""
        return self.data if self.data is not None else self.content
