from datetime import datetime
from pydantic import BaseModel
from typing import Optional
from socialfeed.schemas.user import UserSummary
from socialfeed.core.pagination import Page


class LikeCreate(BaseModel):
    post_id: int


class LikeResponse(BaseModel):
    user_id: int
    post_id: int
    created_at: datetime

    class Config:
        from_attributes = True


class LikeResult(BaseModel):
    """Outcome of an idempotent like: ``like`` is only set when a row was created."""
    created: bool
    like: Optional[LikeResponse] = None

    @property
    def already_liked(self) -> bool:
        return not self.created


class Liker(UserSummary):
    liked_at: datetime


class PostLikesResponse(Page[Liker]):
    liked_by_user: bool = False
