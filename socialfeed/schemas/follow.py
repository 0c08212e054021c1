from datetime import datetime
from pydantic import BaseModel
from typing import Optional
from socialfeed.schemas.user import UserSummary


class FollowResponse(BaseModel):
    follower_id: int
    following_id: int
    created_at: datetime

    class Config:
        from_attributes = True


class FollowResult(BaseModel):
    """Outcome of an idempotent follow: ``follow`` is only set when a row was created."""
    created: bool
    follow: Optional[FollowResponse] = None

    @property
    def already_following(self) -> bool:
        return not self.created


class FollowUser(UserSummary):
    followed_at: datetime


class FollowCounts(BaseModel):
    following_count: int = 0
    follower_count: int = 0
