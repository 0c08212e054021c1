"""Authenticated principal seam.

Token verification lives outside this service: an upstream authentication
middleware resolves the caller and stores a :class:`Principal` on
``request.state.principal``. Handlers only ever see the numeric id.
"""
from typing import Optional
from fastapi import HTTPException, Request, status
from pydantic import BaseModel


class Principal(BaseModel):
    id: int


def _principal_from(request: Request) -> Optional[Principal]:
    principal = getattr(request.state, "principal", None)
    if principal is None:
        return None
    if isinstance(principal, Principal):
        return principal
    return Principal.model_validate(principal)


async def get_current_principal(request: Request) -> Principal:
    """Dependency for routes that require an authenticated caller."""
    principal = _principal_from(request)
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return principal


async def get_current_principal_optional(request: Request) -> Optional[Principal]:
    """Dependency for routes that personalize output when a caller is known."""
    return _principal_from(request)
