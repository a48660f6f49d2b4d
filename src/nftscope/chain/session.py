"""Per-contract session context passed explicitly through the call chain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from nftscope.chain.abi import uri_accessor
from nftscope.core.models import ContractDescriptor
from nftscope.core.types import TokenStandard

if TYPE_CHECKING:
    from nftscope.chain.gateway import RemoteCallGateway
    from nftscope.config import NetworkConfig


@dataclass(frozen=True)
class ContractSession:
    """A classified contract bound to the gateway it was classified through."""

    gateway: RemoteCallGateway
    descriptor: ContractDescriptor
    network: NetworkConfig | None = None

    @property
    def address(self) -> str:
        return self.descriptor.address

    @property
    def standard(self) -> TokenStandard:
        """Effective standard for follow-up calls."""
        return self.descriptor.effective_standard

    @property
    def uri_method(self) -> str:
        return uri_accessor(self.standard)

    async def token_uri(self, token_id: int) -> str:
        """Read the metadata URI through the standard's accessor.

        Raises:
            ContractCallError: If the accessor reverts or returns nothing.
        """
        return await self.gateway.invoke(self.address, self.uri_method, [token_id])

    def explorer_token_url(self, token_id: int) -> str | None:
        if self.network is None:
            return None
        return self.network.explorer_token_url(self.address, token_id)
