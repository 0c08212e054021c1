from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, or_
from socialfeed.models import User, Follow
from socialfeed.schemas.user import UserProfile, UserSearchResult
from socialfeed.core.pagination import check_window
from socialfeed.core.validation import parse_id, require_text
from socialfeed.database import store_operation


class UserService:
    """Read-only user directory: public profiles and name search."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @store_operation
    async def get_profile(self, user_id: int) -> Optional[UserProfile]:
        """Get a user's public profile with follow totals."""
        user_id = parse_id(user_id, "user id")

        follower_count = (
            select(func.count()).select_from(Follow)
            .where(Follow.following_id == User.id)
            .scalar_subquery()
        )
        following_count = (
            select(func.count()).select_from(Follow)
            .where(Follow.follower_id == User.id)
            .scalar_subquery()
        )
        result = await self.db.execute(
            select(
                User.id,
                User.username,
                User.full_name,
                User.created_at,
                follower_count.label("follower_count"),
                following_count.label("following_count"),
            ).where(User.id == user_id)
        )
        row = result.first()
        return UserProfile.model_validate(row) if row else None

    @store_operation
    async def search(self, name: str, limit: int = 20, offset: int = 0) -> List[UserSearchResult]:
        """Find users by partial username or full name."""
        name = require_text(name, "Search term")
        check_window(limit, offset)

        result = await self.db.execute(
            select(User.id, User.username, User.full_name, User.created_at)
            .where(or_(
                User.username.icontains(name, autoescape=True),
                User.full_name.icontains(name, autoescape=True),
            ))
            .order_by(User.created_at.desc(), User.id.asc())
            .limit(limit)
            .offset(offset)
        )
        return [UserSearchResult.model_validate(row) for row in result.all()]
