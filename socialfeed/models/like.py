from datetime import datetime
from sqlalchemy import Integer, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column
from socialfeed.database import Base, utcnow


class Like(Base):
    __tablename__ = "likes"
    
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    post_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    
    __table_args__ = (
        Index("idx_likes_post_id", "post_id"),
    )
    
    def __repr__(self) -> str:
        return f"<Like(user={self.user_id}, post={self.post_id})>"
