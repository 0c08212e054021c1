from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional
from socialfeed.schemas.user import UserSummary


class PostCreate(BaseModel):
    content: str = Field(..., min_length=1)
    media_url: Optional[str] = Field(None, max_length=500)
    comments_enabled: bool = True


class PostUpdate(BaseModel):
    # None means "keep the stored value"
    content: Optional[str] = Field(None, min_length=1)
    media_url: Optional[str] = Field(None, max_length=500)
    comments_enabled: Optional[bool] = None


class PostResponse(BaseModel):
    id: int
    author_id: int
    content: str
    media_url: Optional[str] = None
    comments_enabled: bool = True
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PostWithAuthor(PostResponse):
    author: UserSummary


class PostDetail(PostWithAuthor):
    liked_by_viewer: bool = False


class LikedPost(PostWithAuthor):
    liked_at: datetime


class FeedItem(PostWithAuthor):
    like_count: int = 0
    comment_count: int = 0
    liked_by_viewer: bool = False
