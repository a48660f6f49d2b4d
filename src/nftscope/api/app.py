"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nftscope import __version__
from nftscope.api.routes import contracts_router, health_router, metadata_router
from nftscope.client import NftscopeClient
from nftscope.config import get_settings
from nftscope.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Opens one client (RPC gateway and HTTP fetcher) shared by all requests.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    logger.info("Initializing nftscope client...")
    async with NftscopeClient(settings) as client:
        app.state.client = client
        logger.info("Application startup complete")

        yield

        logger.info("Shutting down application...")
        app.state.client = None

    logger.info("Application shutdown complete")


def create_app(
    *,
    title: str = "nftscope API",
    description: str = "NFT contract classification, token discovery and metadata resolution",
    version: str = __version__,
    cors_origins: list[str] | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        title: API title for OpenAPI docs
        description: API description for OpenAPI docs
        version: API version
        cors_origins: List of allowed CORS origins

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=title,
        description=description,
        version=version,
        lifespan=lifespan,
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    if cors_origins is None:
        cors_origins = ["http://localhost:3000"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, prefix="/api/v1")
    app.include_router(contracts_router, prefix="/api/v1")
    app.include_router(metadata_router, prefix="/api/v1")

    return app
