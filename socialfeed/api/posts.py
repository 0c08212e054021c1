from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from socialfeed.database import get_db
from socialfeed.core.dependencies import Principal, get_current_principal, get_current_principal_optional
from socialfeed.core.pagination import Pagination, Page
from socialfeed.schemas.common import NotFoundOrUnauthorized
from socialfeed.schemas.post import (
    PostCreate, PostUpdate, PostResponse, PostWithAuthor, PostDetail, FeedItem
)
from socialfeed.services.post import PostService
from socialfeed.services.like import LikeService
from socialfeed.services.feed import FeedService

router = APIRouter()


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    data: PostCreate,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """Create a new post."""
    service = PostService(db)
    return await service.create(principal.id, data)


@router.get("/feed", response_model=Page[FeedItem])
async def get_feed(
    page: int = Query(1),
    limit: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """Get the caller's feed (own posts and posts by followed users)."""
    pagination = Pagination.from_query(page, limit)
    service = FeedService(db)
    posts = await service.get_feed(principal.id, pagination.limit, pagination.offset)
    return pagination.wrap(posts)


@router.get("/search", response_model=Page[PostWithAuthor])
async def search_posts(
    q: str = Query("", description="Matches content, username or full name"),
    page: int = Query(1),
    limit: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """Search posts."""
    pagination = Pagination.from_query(page, limit)
    service = PostService(db)
    posts = await service.search(q, pagination.limit, pagination.offset)
    return pagination.wrap(posts)


@router.get("/my", response_model=Page[PostWithAuthor])
async def get_my_posts(
    page: int = Query(1),
    limit: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """Get the caller's own posts."""
    pagination = Pagination.from_query(page, limit)
    service = PostService(db)
    posts = await service.list_by_author(principal.id, pagination.limit, pagination.offset)
    return pagination.wrap(posts)


@router.get("/user/{user_id}", response_model=Page[PostWithAuthor])
async def get_user_posts(
    user_id: str,
    page: int = Query(1),
    limit: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """Get posts by a specific user."""
    pagination = Pagination.from_query(page, limit)
    service = PostService(db)
    posts = await service.list_by_author(user_id, pagination.limit, pagination.offset)
    return pagination.wrap(posts)


@router.get("/{post_id}", response_model=PostDetail)
async def get_post(
    post_id: str,
    db: AsyncSession = Depends(get_db),
    principal: Optional[Principal] = Depends(get_current_principal_optional)
):
    """Get a single post."""
    service = PostService(db)
    post = await service.get_by_id(post_id)

    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found"
        )

    liked = False
    if principal:
        liked = await LikeService(db, service).has_liked(principal.id, post.id)

    return PostDetail(**post.model_dump(), liked_by_viewer=liked)


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str,
    data: PostUpdate,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """Update a post (owner only)."""
    service = PostService(db)
    outcome = await service.update(post_id, principal.id, data)

    if isinstance(outcome, NotFoundOrUnauthorized):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found or unauthorized"
        )

    return outcome.row


@router.delete("/{post_id}")
async def delete_post(
    post_id: str,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """Delete a post (owner only)."""
    service = PostService(db)
    if not await service.soft_delete(post_id, principal.id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found or unauthorized"
        )
    return {"message": "Post deleted successfully"}
