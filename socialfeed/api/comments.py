from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from socialfeed.database import get_db
from socialfeed.core.dependencies import Principal, get_current_principal
from socialfeed.core.pagination import Pagination, Page
from socialfeed.schemas.common import NotFoundOrUnauthorized
from socialfeed.schemas.comment import (
    CommentCreate, CommentUpdate, CommentResponse, CommentWithAuthor
)
from socialfeed.services.comment import CommentService

router = APIRouter()


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    data: CommentCreate,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """Comment on a post."""
    service = CommentService(db)
    return await service.create(data.post_id, principal.id, data.content)


@router.put("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: str,
    data: CommentUpdate,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """Edit a comment (author only)."""
    service = CommentService(db)
    outcome = await service.update(comment_id, principal.id, data.content)

    if isinstance(outcome, NotFoundOrUnauthorized):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Comment not found or unauthorized"
        )

    return outcome.row


@router.delete("/{comment_id}")
async def delete_comment(
    comment_id: str,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """Delete a comment (author only)."""
    service = CommentService(db)
    if not await service.delete(comment_id, principal.id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Comment not found or unauthorized"
        )
    return {"message": "Comment deleted"}


@router.get("/post/{post_id}", response_model=Page[CommentWithAuthor])
async def get_post_comments(
    post_id: str,
    page: int = Query(1),
    limit: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """Get comments on a post."""
    pagination = Pagination.from_query(page, limit)
    service = CommentService(db)
    comments = await service.list_for_post(post_id, pagination.limit, pagination.offset)
    return pagination.wrap(comments)
