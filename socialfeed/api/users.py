from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from socialfeed.database import get_db
from socialfeed.core.dependencies import Principal, get_current_principal
from socialfeed.core.pagination import Pagination, Page
from socialfeed.schemas.user import UserProfile, UserSearchResult
from socialfeed.schemas.follow import FollowUser, FollowCounts
from socialfeed.services.user import UserService
from socialfeed.services.follow import FollowService

router = APIRouter()


@router.get("/search", response_model=Page[UserSearchResult])
async def search_users(
    name: str = Query("", description="Matches username or full name"),
    page: int = Query(1),
    limit: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """Search users by name."""
    pagination = Pagination.from_query(page, limit)
    service = UserService(db)
    users = await service.search(name, pagination.limit, pagination.offset)
    return pagination.wrap(users)


@router.get("/following", response_model=Page[FollowUser])
async def get_following(
    page: int = Query(1),
    limit: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """Get users the caller follows."""
    pagination = Pagination.from_query(page, limit)
    service = FollowService(db)
    users = await service.list_following(principal.id, pagination.limit, pagination.offset)
    return pagination.wrap(users)


@router.get("/followers", response_model=Page[FollowUser])
async def get_followers(
    page: int = Query(1),
    limit: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """Get the caller's followers."""
    pagination = Pagination.from_query(page, limit)
    service = FollowService(db)
    users = await service.list_followers(principal.id, pagination.limit, pagination.offset)
    return pagination.wrap(users)


@router.get("/{user_id}/profile", response_model=UserProfile)
async def get_user_profile(
    user_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Get a user's public profile."""
    service = UserService(db)
    profile = await service.get_profile(user_id)
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return profile


@router.post("/{user_id}/follow")
async def follow_user(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """Follow a user. Repeating the call is harmless."""
    service = FollowService(db)
    result = await service.follow(principal.id, user_id)
    message = "Followed" if result.created else "Already following"
    return {"message": message, **result.model_dump()}


@router.delete("/{user_id}/unfollow")
async def unfollow_user(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """Unfollow a user."""
    service = FollowService(db)
    if not await service.unfollow(principal.id, user_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Not following"
        )
    return {"message": "Unfollowed"}


@router.get("/{user_id}/stats", response_model=FollowCounts)
async def get_follow_counts(
    user_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Get follower and following totals."""
    service = FollowService(db)
    return await service.follow_counts(user_id)
