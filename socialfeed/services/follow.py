import logging
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, exists, func
from socialfeed.models import User, Follow
from socialfeed.schemas.follow import FollowResponse, FollowResult, FollowUser, FollowCounts
from socialfeed.core.exceptions import NotFoundError, SelfReferenceError
from socialfeed.core.pagination import check_window
from socialfeed.core.validation import parse_id
from socialfeed.database import store_operation, insert_ignore

logger = logging.getLogger(__name__)


class FollowService:
    """Follow edges between users."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @store_operation
    async def follow(self, follower_id: int, following_id: int) -> FollowResult:
        """Follow a user.

        Following someone already followed is not an error: the result has
        ``created=False`` and no edge. Self-follows are rejected before any
        statement is issued.
        """
        follower_id = parse_id(follower_id, "user id")
        following_id = parse_id(following_id, "user id")
        if follower_id == following_id:
            raise SelfReferenceError()

        # Check if target user exists
        target = await self.db.scalar(select(User.id).where(User.id == following_id))
        if target is None:
            raise NotFoundError("User not found")

        follows = Follow.__table__
        result = await self.db.execute(
            insert_ignore(self.db, follows)
            .values(follower_id=follower_id, following_id=following_id)
            .returning(follows.c.follower_id, follows.c.following_id, follows.c.created_at)
        )
        row = result.first()

        if row is None:
            logger.debug("User %s already follows %s", follower_id, following_id)
            return FollowResult(created=False)

        logger.info("User %s followed %s", follower_id, following_id)
        return FollowResult(created=True, follow=FollowResponse.model_validate(row))

    @store_operation
    async def unfollow(self, follower_id: int, following_id: int) -> bool:
        """Unfollow a user. Returns whether an edge was removed."""
        follower_id = parse_id(follower_id, "user id")
        following_id = parse_id(following_id, "user id")

        result = await self.db.execute(
            delete(Follow).where(
                Follow.follower_id == follower_id,
                Follow.following_id == following_id
            )
        )
        removed = result.rowcount > 0

        if removed:
            logger.info("User %s unfollowed %s", follower_id, following_id)
        return removed

    async def _list(self, user_column, edge_column, user_id: int, limit: int, offset: int) -> List[FollowUser]:
        result = await self.db.execute(
            select(User.id, User.username, User.full_name, Follow.created_at.label("followed_at"))
            .join(Follow, user_column == User.id)
            .where(edge_column == user_id)
            .order_by(Follow.created_at.desc(), User.id.asc())
            .limit(limit)
            .offset(offset)
        )
        return [FollowUser.model_validate(row) for row in result.all()]

    @store_operation
    async def list_following(self, user_id: int, limit: int = 20, offset: int = 0) -> List[FollowUser]:
        """Get users that user is following."""
        user_id = parse_id(user_id, "user id")
        check_window(limit, offset)
        return await self._list(Follow.following_id, Follow.follower_id, user_id, limit, offset)

    @store_operation
    async def list_followers(self, user_id: int, limit: int = 20, offset: int = 0) -> List[FollowUser]:
        """Get user's followers."""
        user_id = parse_id(user_id, "user id")
        check_window(limit, offset)
        return await self._list(Follow.follower_id, Follow.following_id, user_id, limit, offset)

    @store_operation
    async def follow_counts(self, user_id: int) -> FollowCounts:
        """Following and follower totals; zero for users without edges."""
        user_id = parse_id(user_id, "user id")

        following = (
            select(func.count()).select_from(Follow)
            .where(Follow.follower_id == user_id)
            .scalar_subquery()
        )
        followers = (
            select(func.count()).select_from(Follow)
            .where(Follow.following_id == user_id)
            .scalar_subquery()
        )
        result = await self.db.execute(
            select(following.label("following_count"), followers.label("follower_count"))
        )
        row = result.one()
        return FollowCounts(
            following_count=row.following_count or 0,
            follower_count=row.follower_count or 0,
        )

    @store_operation
    async def is_following(self, follower_id: int, following_id: int) -> bool:
        follower_id = parse_id(follower_id, "user id")
        following_id = parse_id(following_id, "user id")

        found = await self.db.scalar(
            select(exists().where(
                Follow.follower_id == follower_id,
                Follow.following_id == following_id
            ))
        )
        return bool(found)
