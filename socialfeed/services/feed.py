import logging
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, or_, exists
from sqlalchemy.orm import contains_eager
from socialfeed.models import Post, Follow, Like, Comment
from socialfeed.schemas.post import PostWithAuthor, FeedItem
from socialfeed.core.pagination import check_window
from socialfeed.core.validation import parse_id
from socialfeed.database import store_operation

logger = logging.getLogger(__name__)


class FeedService:
    """Personalized feed: the viewer's own posts plus posts by followed users.

    The whole page is one statement. Like and comment totals come from
    grouped subqueries and ``liked_by_viewer`` from a correlated EXISTS, so
    no per-post follow-up queries are issued.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    def _feed_query(self, viewer_id: int):
        like_counts = (
            select(Like.post_id, func.count().label("like_count"))
            .group_by(Like.post_id)
            .subquery()
        )
        comment_counts = (
            select(Comment.post_id, func.count().label("comment_count"))
            .where(Comment.is_deleted.is_(False))
            .group_by(Comment.post_id)
            .subquery()
        )
        followed = select(Follow.following_id).where(Follow.follower_id == viewer_id)
        liked_by_viewer = exists().where(Like.post_id == Post.id, Like.user_id == viewer_id)

        return (
            select(
                Post,
                func.coalesce(like_counts.c.like_count, 0).label("like_count"),
                func.coalesce(comment_counts.c.comment_count, 0).label("comment_count"),
                liked_by_viewer.label("liked_by_viewer"),
            )
            .join(Post.author)
            .options(contains_eager(Post.author))
            .outerjoin(like_counts, like_counts.c.post_id == Post.id)
            .outerjoin(comment_counts, comment_counts.c.post_id == Post.id)
            .where(
                Post.is_deleted.is_(False),
                or_(Post.author_id == viewer_id, Post.author_id.in_(followed)),
            )
            .execution_options(populate_existing=True)
        )

    @store_operation
    async def get_feed(self, viewer_id: int, limit: int = 20, offset: int = 0) -> List[FeedItem]:
        """Get one page of the viewer's feed, newest first.

        Equal timestamps fall back to id order so pages stay stable.
        """
        viewer_id = parse_id(viewer_id, "user id")
        check_window(limit, offset)

        result = await self.db.execute(
            self._feed_query(viewer_id)
            .order_by(Post.created_at.desc(), Post.id.asc())
            .limit(limit)
            .offset(offset)
        )
        rows = result.all()
        logger.debug("Feed for user %s: %d posts at offset %d", viewer_id, len(rows), offset)

        return [
            FeedItem(
                **PostWithAuthor.model_validate(post).model_dump(),
                like_count=like_count,
                comment_count=comment_count,
                liked_by_viewer=bool(liked),
            )
            for post, like_count, comment_count, liked in rows
        ]
