"""Token existence probing."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from nftscope.chain.abi import ZERO_ADDRESS, is_zero_address
from nftscope.chain.gateway import RemoteCallGateway
from nftscope.chain.session import ContractSession
from nftscope.core.models import ProbeResult
from nftscope.core.outcome import attempt
from nftscope.core.types import TokenStandard

logger = logging.getLogger(__name__)

ExistenceCheck = Callable[[RemoteCallGateway, str, int], Awaitable[bool]]


async def _owner_is_set(gateway: RemoteCallGateway, address: str, token_id: int) -> bool:
    outcome = await attempt(
        gateway.invoke(address, "ownerOf", [token_id]),
        label=f"ownerOf({token_id}) on {address} (probe inconclusive)",
    )
    owner = outcome.value_or_none()
    return owner is not None and not is_zero_address(owner)


async def _null_balance_positive(gateway: RemoteCallGateway, address: str, token_id: int) -> bool:
    # Heuristic: a non-zero balance at the null address means the id has been touched.
    outcome = await attempt(
        gateway.invoke(address, "balanceOf", [ZERO_ADDRESS, token_id]),
        label=f"balanceOf(0x0, {token_id}) on {address} (probe inconclusive)",
    )
    balance = outcome.value_or_none()
    return balance is not None and balance > 0


EXISTENCE_CHECKS: dict[TokenStandard, ExistenceCheck] = {
    TokenStandard.ERC721: _owner_is_set,
    TokenStandard.ERC1155: _null_balance_positive,
}


class TokenExistenceProber:
    """Reports whether a token id is minted. Never raises for call failures."""

    def __init__(self, checks: dict[TokenStandard, ExistenceCheck] | None = None) -> None:
        self._checks = checks if checks is not None else EXISTENCE_CHECKS

    async def check(
        self,
        gateway: RemoteCallGateway,
        address: str,
        standard: TokenStandard,
        token_id: int,
    ) -> bool:
        """Check one id against an explicit standard. Unknown standards are never called."""
        check = self._checks.get(standard)
        if check is None:
            return False
        return await check(gateway, address, token_id)

    async def is_minted(self, session: ContractSession, token_id: int) -> bool:
        return await self.check(session.gateway, session.address, session.standard, token_id)

    async def probe(self, session: ContractSession, token_id: int) -> ProbeResult:
        """Existence check plus the token URI when the token is minted."""
        minted = await self.is_minted(session, token_id)
        uri = None
        if minted:
            outcome = await attempt(
                session.token_uri(token_id),
                label=f"{session.uri_method}({token_id}) on {session.address}",
            )
            uri = outcome.value_or_none()
            if uri is None:
                logger.info(f"Token {token_id} on {session.address} is minted but has no readable URI")
        return ProbeResult(token_id=token_id, minted=minted, uri=uri)
