"""Request schemas for API endpoints."""

from __future__ import annotations

from pydantic import Field

from nftscope.api.schemas.base import APIBaseSchema
from nftscope.probing.discovery import DiscoveryConfig


class DiscoverRequest(APIBaseSchema):
    """Optional overrides for one discovery pass."""

    delay: float | None = Field(default=None, ge=0, le=10, description="Pacing delay in seconds")
    batch_size: int | None = Field(default=None, ge=1, le=100, description="Sweep batch width")
    max_attempts: int | None = Field(
        default=None, ge=1, le=10_000, description="Sweep ceiling"
    )

    def apply(self, base: DiscoveryConfig) -> DiscoveryConfig:
        """Overlay the provided fields on a base config."""
        return DiscoveryConfig(
            delay=base.delay if self.delay is None else self.delay,
            batch_size=base.batch_size if self.batch_size is None else self.batch_size,
            max_attempts=base.max_attempts if self.max_attempts is None else self.max_attempts,
        )
