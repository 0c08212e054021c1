from datetime import datetime
from sqlalchemy import String, Integer, DateTime, ForeignKey, Index, Text, Boolean
from sqlalchemy.orm import Mapped, mapped_column, relationship
from socialfeed.database import Base, utcnow
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from socialfeed.models.user import User

class Post(Base):
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    author_id: Mapped[int] = mapped_column(
        "user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    media_url: Mapped[str] = mapped_column(String(500), nullable=True)
    comments_enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Soft delete: rows are never removed, only hidden from reads
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    # Relationships
    author: Mapped["User"] = relationship("User")

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, author_id={self.author_id})>"


# Profile and feed queries filter on author then sort by recency
Index("idx_posts_user_created", Post.author_id, Post.created_at)
