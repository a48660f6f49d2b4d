"""Health check endpoints."""

from __future__ import annotations

import logging
from typing import Literal

from fastapi import APIRouter, Request

from nftscope import __version__
from nftscope.api.schemas import HealthResponse
from nftscope.core.exceptions import ContractCallError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    operation_id="getHealth",
    summary="Health check",
    description="Check the health status of the API and its RPC endpoint.",
)
async def health_check(request: Request) -> HealthResponse:
    """Check API health status."""
    services: dict[str, Literal["up", "down", "unknown"]] = {}
    status: Literal["healthy", "degraded", "unhealthy"] = "healthy"
    block_number = None

    client = getattr(request.app.state, "client", None)
    if client is None:
        services["rpc"] = "unknown"
        status = "unhealthy"
    else:
        try:
            block_number = await client.get_block_number()
            services["rpc"] = "up"
        except ContractCallError as e:
            logger.warning(f"RPC health check failed: {e.message}")
            services["rpc"] = "down"
            status = "degraded"

    return HealthResponse(
        status=status,
        version=__version__,
        services=services,
        block_number=block_number,
    )


@router.get(
    "/ready",
    operation_id="getReady",
    summary="Readiness check",
    description="Check if the API is ready to serve traffic.",
)
async def readiness_check(request: Request) -> dict[str, bool]:
    """Check if API is ready to serve traffic."""
    return {"ready": getattr(request.app.state, "client", None) is not None}
