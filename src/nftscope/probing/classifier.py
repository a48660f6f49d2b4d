"""Contract classification by capability probing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from eth_utils import to_checksum_address

from nftscope.chain.gateway import RemoteCallGateway
from nftscope.core.exceptions import ContractNotFoundError, InvalidAddressError
from nftscope.core.models import ContractDescriptor
from nftscope.core.outcome import attempt
from nftscope.core.types import ClassificationPath, TokenStandard

logger = logging.getLogger(__name__)

# Token id used for every classification probe
PROBE_TOKEN_ID = 1


@dataclass(frozen=True)
class ClassificationProbe:
    """One step of the classification chain: call ``method(1)``; success means ``standard``."""

    method: str
    standard: TokenStandard
    path: ClassificationPath


CLASSIFICATION_PROBES: tuple[ClassificationProbe, ...] = (
    ClassificationProbe("tokenURI", TokenStandard.ERC721, ClassificationPath.TOKEN_URI),
    ClassificationProbe("ownerOf", TokenStandard.ERC721, ClassificationPath.OWNER_OF),
    ClassificationProbe("uri", TokenStandard.ERC1155, ClassificationPath.MULTI_TOKEN_URI),
)

# Descriptor field -> accessor names, tried in order
DESCRIPTIVE_FIELDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("display_name", ("name",)),
    ("display_symbol", ("symbol",)),
    ("total_supply", ("totalSupply",)),
    ("max_supply", ("maxSupply", "MAX_SUPPLY")),
)


class ContractClassifier:
    """
    Determines which token standard a contract implements.

    Only observable call success or failure is used; declared interfaces
    (ERC-165) are never consulted. Probe failures degrade to the next step,
    and only a malformed address or an address without code is an error.
    """

    def __init__(
        self,
        gateway: RemoteCallGateway,
        probes: tuple[ClassificationProbe, ...] = CLASSIFICATION_PROBES,
    ) -> None:
        self._gateway = gateway
        self._probes = probes

    async def classify(self, address: str) -> ContractDescriptor:
        """
        Classify the contract at ``address``.

        Raises:
            InvalidAddressError: If the address is malformed
            ContractNotFoundError: If no code is deployed at the address
        """
        address = await self.ensure_contract(address)

        fields = await self.read_descriptive_fields(address)
        standard, path = await self.detect_standard(address)

        descriptor = ContractDescriptor(
            address=address,
            standard=standard,
            classification_path=path,
            **fields,
        )
        logger.info(
            f"Classified {address} as {standard.value} via {path.value} "
            f"({descriptor.display_name or 'Unknown'} / {descriptor.display_symbol or 'Unknown'})"
        )
        return descriptor

    async def ensure_contract(self, address: str) -> str:
        """Validate the address and confirm it hosts code; returns it checksummed."""
        address = address.strip()
        if not self._gateway.is_valid_address(address):
            raise InvalidAddressError(address)

        address = to_checksum_address(address)
        code = await self._gateway.get_code(address)
        if not code:
            raise ContractNotFoundError(address)
        return address

    async def read_descriptive_fields(self, address: str) -> dict[str, Any]:
        """Read name/symbol/supply fields; each one is independently optional."""
        fields: dict[str, Any] = {}

        for field_name, methods in DESCRIPTIVE_FIELDS:
            for method in methods:
                outcome = await attempt(
                    self._gateway.invoke(address, method),
                    label=f"{method}() on {address}",
                )
                if outcome.ok:
                    fields[field_name] = outcome.value
                    break
            else:
                logger.debug(
                    f"Contract {address} does not implement {' or '.join(m + '()' for m in methods)}"
                )

        return fields

    async def detect_standard(self, address: str) -> tuple[TokenStandard, ClassificationPath]:
        """Run the probe chain, stopping at the first probe that answers."""
        for probe in self._probes:
            outcome = await attempt(
                self._gateway.invoke(address, probe.method, [PROBE_TOKEN_ID]),
                label=f"{probe.method}({PROBE_TOKEN_ID}) on {address}",
            )
            if outcome.ok:
                return probe.standard, probe.path

        logger.warning(
            f"Could not verify contract type for {address}; treating it as "
            f"{TokenStandard.ERC721.value}"
        )
        return TokenStandard.UNKNOWN, ClassificationPath.FALLBACK
