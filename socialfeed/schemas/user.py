from datetime import datetime
from pydantic import BaseModel
from typing import Optional


class UserSummary(BaseModel):
    """Public identity attached to posts, comments and edges."""
    id: int
    username: str
    full_name: Optional[str] = None

    class Config:
        from_attributes = True


class UserProfile(UserSummary):
    created_at: datetime
    follower_count: int = 0
    following_count: int = 0


class UserSearchResult(UserSummary):
    created_at: datetime
