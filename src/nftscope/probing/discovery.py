"""Token discovery: heuristic minted sampling plus a batched unminted sweep."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from nftscope.chain.session import ContractSession
from nftscope.core.models import DiscoveryResult, MintedToken
from nftscope.core.outcome import attempt
from nftscope.probing.existence import TokenExistenceProber

if TYPE_CHECKING:
    from nftscope.config import NftscopeSettings

logger = logging.getLogger(__name__)

SEQUENTIAL_CANDIDATES = range(1, 21)
HEX_CANDIDATES = ("0x1", "0x01", "0x001")
MEME_CANDIDATES = (42, 69, 420, 1337)


@dataclass
class DiscoveryConfig:
    """Tunables for one discovery pass."""

    # Pause after every sampled candidate and between empty sweep batches (seconds)
    delay: float = 0.1

    # Existence probes issued concurrently per sweep batch
    batch_size: int = 10

    # Ceiling on identifiers probed by the sweep
    max_attempts: int = 1000

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {self.batch_size}")
        if self.max_attempts < 0:
            raise ValueError(f"max_attempts must be non-negative, got {self.max_attempts}")
        if self.delay < 0:
            raise ValueError(f"delay must be non-negative, got {self.delay}")

    @classmethod
    def from_settings(cls, settings: NftscopeSettings) -> DiscoveryConfig:
        return cls(
            delay=settings.discovery_delay,
            batch_size=settings.discovery_batch_size,
            max_attempts=settings.discovery_max_attempts,
        )


def candidate_token_ids(now: float | None = None) -> list[int]:
    """
    Heuristic ids most contracts have minted, in probing order.

    Low sequential ids, hex spellings of 1, the current Unix timestamp,
    and a few popular numbers. Duplicates are dropped, first occurrence wins.
    """
    timestamp = int(time.time() if now is None else now)
    candidates: Iterable[int] = (
        *SEQUENTIAL_CANDIDATES,
        *(int(h, 16) for h in HEX_CANDIDATES),
        timestamp,
        *MEME_CANDIDATES,
    )
    return list(dict.fromkeys(candidates))


class TokenDiscoveryEngine:
    """
    Builds a partial inventory of minted and unminted token ids.

    Features:
    - Sequential sampling of heuristic ids through the URI accessor
    - Batched concurrent existence sweep for the first free id
    - Fixed pacing between remote calls
    """

    def __init__(
        self,
        prober: TokenExistenceProber | None = None,
        config: DiscoveryConfig | None = None,
    ) -> None:
        self._prober = prober or TokenExistenceProber()
        self.config = config or DiscoveryConfig()

    async def discover(
        self,
        session: ContractSession,
        *,
        now: float | None = None,
    ) -> DiscoveryResult:
        """Run the sampling pass, then the sweep. Never raises for call failures."""
        logger.info(f"Starting token id discovery for {session.address}")
        result = DiscoveryResult()

        await self.sample_minted(session, result, candidate_token_ids(now))

        unminted_id, checked = await self.find_unminted(
            session,
            exclude=frozenset(result.minted_token_ids),
        )
        result.total_checked += checked
        if unminted_id is not None:
            result.unminted_tokens.append(unminted_id)

        logger.info(
            f"{len(result.minted_tokens)} minted and {len(result.unminted_tokens)} unminted "
            f"token ids found for {session.address} ({result.total_checked} checked)"
        )
        return result

    async def sample_minted(
        self,
        session: ContractSession,
        result: DiscoveryResult,
        candidates: Iterable[int],
    ) -> None:
        """Try the URI accessor for each candidate in order, recording answers."""
        seen: set[int] = set()

        for token_id in candidates:
            if token_id in seen:
                continue
            seen.add(token_id)

            outcome = await attempt(
                session.token_uri(token_id),
                label=f"{session.uri_method}({token_id}) on {session.address}",
            )
            result.total_checked += 1

            if outcome.ok:
                result.minted_tokens.append(MintedToken(token_id=token_id, uri=outcome.value))
            elif outcome.error.indicates_nonexistent_token:
                logger.debug(f"Token {token_id} does not exist on {session.address}")

            await asyncio.sleep(self.config.delay)

    async def find_unminted(
        self,
        session: ContractSession,
        *,
        exclude: frozenset[int] = frozenset(),
    ) -> tuple[int | None, int]:
        """
        Sweep ids upward from 1 in concurrent batches.

        Returns the lowest free id of the first batch containing one (ids in
        ``exclude`` never count as free) and the number of ids probed. The id
        is None when nothing was found within ``max_attempts``.
        """
        checked = 0
        next_id = 1

        while checked < self.config.max_attempts:
            width = min(self.config.batch_size, self.config.max_attempts - checked)
            batch = range(next_id, next_id + width)

            minted = await asyncio.gather(
                *(self._prober.is_minted(session, token_id) for token_id in batch)
            )
            checked += width
            next_id += width

            free = sorted(
                token_id
                for token_id, is_minted in zip(batch, minted)
                if not is_minted and token_id not in exclude
            )
            if free:
                logger.debug(f"Found unminted token {free[0]} on {session.address}")
                return free[0], checked

            await asyncio.sleep(self.config.delay)

        logger.info(
            f"No unminted token found on {session.address} within {self.config.max_attempts} checks"
        )
        return None, checked
