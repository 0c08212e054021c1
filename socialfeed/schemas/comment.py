from datetime import datetime
from pydantic import BaseModel, Field
from socialfeed.schemas.user import UserSummary


class CommentCreate(BaseModel):
    post_id: int
    content: str = Field(..., min_length=1)


class CommentUpdate(BaseModel):
    content: str = Field(..., min_length=1)


class CommentResponse(BaseModel):
    id: int
    post_id: int
    author_id: int
    content: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CommentWithAuthor(CommentResponse):
    author: UserSummary
