from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Response, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from socialfeed.database import get_db
from socialfeed.core.dependencies import Principal, get_current_principal, get_current_principal_optional
from socialfeed.core.pagination import Pagination, Page
from socialfeed.schemas.like import LikeCreate, PostLikesResponse
from socialfeed.schemas.post import LikedPost
from socialfeed.services.like import LikeService

router = APIRouter()


@router.post("")
async def like_post(
    data: LikeCreate,
    response: Response,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """Like a post. Repeating the call is harmless."""
    service = LikeService(db)
    result = await service.like(principal.id, data.post_id)

    if not result.created:
        return {"message": "Already liked", **result.model_dump()}

    response.status_code = status.HTTP_201_CREATED
    return {"message": "Post liked", **result.model_dump()}


@router.delete("/{post_id}")
async def unlike_post(
    post_id: str,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """Unlike a post."""
    service = LikeService(db)
    if not await service.unlike(principal.id, post_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Like not found"
        )
    return {"message": "Unliked"}


@router.get("/post/{post_id}", response_model=PostLikesResponse)
async def get_post_likes(
    post_id: str,
    page: int = Query(1),
    limit: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_db),
    principal: Optional[Principal] = Depends(get_current_principal_optional)
):
    """Get users who liked a post."""
    pagination = Pagination.from_query(page, limit)
    service = LikeService(db)
    likers = await service.list_for_post(post_id, pagination.limit, pagination.offset)

    liked_by_user = False
    if principal:
        liked_by_user = await service.has_liked(principal.id, post_id)

    return PostLikesResponse(
        **pagination.wrap(likers).model_dump(),
        liked_by_user=liked_by_user,
    )


@router.get("/user/{user_id}", response_model=Page[LikedPost])
async def get_user_likes(
    user_id: str,
    page: int = Query(1),
    limit: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """Get posts liked by a user."""
    pagination = Pagination.from_query(page, limit)
    service = LikeService(db)
    posts = await service.list_liked_posts(user_id, pagination.limit, pagination.offset)
    return pagination.wrap(posts)
