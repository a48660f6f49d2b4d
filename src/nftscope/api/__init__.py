"""FastAPI application for nftscope."""

from nftscope.api.app import create_app

__all__ = ["create_app"]
