from datetime import datetime
from sqlalchemy import Integer, DateTime, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column
from socialfeed.database import Base, utcnow


class Follow(Base):
    __tablename__ = "follows"
    
    # The pair is the identity; there is no surrogate id
    follower_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    following_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    
    __table_args__ = (
        CheckConstraint("follower_id <> following_id", name="ck_follows_no_self"),
        Index("idx_follows_following_id", "following_id"),
    )
    
    def __repr__(self) -> str:
        return f"<Follow(follower={self.follower_id}, following={self.following_id})>"
