"""API route modules."""

from nftscope.api.routes.contracts import router as contracts_router
from nftscope.api.routes.health import router as health_router
from nftscope.api.routes.metadata import router as metadata_router

__all__ = [
    "contracts_router",
    "health_router",
    "metadata_router",
]
