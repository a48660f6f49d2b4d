"""Fixed read-only method surface probed on token contracts."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from functools import cached_property
from typing import Any

from eth_abi import decode, encode
from eth_utils import function_signature_to_4byte_selector

from nftscope.core.types import TokenStandard

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


@dataclass(frozen=True)
class MethodSpec:
    """A view method: name plus ABI input and output types."""

    name: str
    inputs: tuple[str, ...] = ()
    outputs: tuple[str, ...] = ()

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.inputs)})"

    @cached_property
    def selector(self) -> bytes:
        return function_signature_to_4byte_selector(self.signature)

    def encode_call(self, args: Sequence[Any]) -> bytes:
        """Build calldata: selector followed by ABI-encoded arguments."""
        if len(args) != len(self.inputs):
            raise ValueError(
                f"{self.signature} takes {len(self.inputs)} argument(s), got {len(args)}"
            )
        return self.selector + encode(list(self.inputs), list(args))

    def decode_result(self, data: bytes) -> Any:
        """Decode return data; single outputs are unwrapped."""
        values = decode(list(self.outputs), data)
        return values[0] if len(values) == 1 else values


_METHODS = (
    # ERC-721 surface (with common extensions)
    MethodSpec("tokenURI", ("uint256",), ("string",)),
    MethodSpec("ownerOf", ("uint256",), ("address",)),
    MethodSpec("name", (), ("string",)),
    MethodSpec("symbol", (), ("string",)),
    MethodSpec("totalSupply", (), ("uint256",)),
    MethodSpec("maxSupply", (), ("uint256",)),
    MethodSpec("MAX_SUPPLY", (), ("uint256",)),
    MethodSpec("tokenByIndex", ("uint256",), ("uint256",)),
    MethodSpec("exists", ("uint256",), ("bool",)),
    # ERC-1155 surface
    MethodSpec("uri", ("uint256",), ("string",)),
    MethodSpec("balanceOf", ("address", "uint256"), ("uint256",)),
)

METHODS: dict[str, MethodSpec] = {m.name: m for m in _METHODS}

ERC721_METHODS = frozenset(
    {
        "tokenURI",
        "ownerOf",
        "name",
        "symbol",
        "totalSupply",
        "maxSupply",
        "MAX_SUPPLY",
        "tokenByIndex",
        "exists",
        "balanceOf",
    }
)
ERC1155_METHODS = frozenset({"uri", "balanceOf"})

# Metadata URI accessor per standard
URI_ACCESSORS: dict[TokenStandard, str] = {
    TokenStandard.ERC721: "tokenURI",
    TokenStandard.ERC1155: "uri",
}


def get_method(name: str) -> MethodSpec:
    """Look up a method by name."""
    try:
        return METHODS[name]
    except KeyError:
        raise ValueError(f"Unknown contract method: {name}") from None


def uri_accessor(standard: TokenStandard) -> str:
    """URI accessor for a standard; unknown contracts use the ERC-721 one."""
    return URI_ACCESSORS.get(standard, URI_ACCESSORS[TokenStandard.ERC721])


def is_zero_address(address: str) -> bool:
    return int(address, 16) == 0
