"""FastAPI dependency injection."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from nftscope.api.schemas import ErrorDetail
from nftscope.client import NftscopeClient
from nftscope.core.exceptions import NftscopeError


async def get_client(request: Request) -> NftscopeClient:
    """Get the shared nftscope client from app state."""
    client = getattr(request.app.state, "client", None)
    if client is None:
        raise HTTPException(status_code=503, detail="Client not initialized")
    return client


def api_error(status_code: int, error: NftscopeError, code: str) -> HTTPException:
    """Wrap a domain error in an HTTPException with a structured body."""
    detail = ErrorDetail(code=code, message=error.message, details=error.details or None)
    return HTTPException(status_code=status_code, detail=detail.model_dump(by_alias=True))


# Type aliases for cleaner dependency injection
Client = Annotated[NftscopeClient, Depends(get_client)]
