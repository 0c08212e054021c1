import logging
from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, exists
from sqlalchemy.orm import contains_eager
from socialfeed.models import Post, Like, User
from socialfeed.schemas.like import LikeResponse, LikeResult, Liker
from socialfeed.schemas.post import PostWithAuthor, LikedPost
from socialfeed.services.post import PostService
from socialfeed.core.exceptions import NotFoundError, ForbiddenError
from socialfeed.core.pagination import check_window
from socialfeed.core.validation import parse_id
from socialfeed.database import store_operation, insert_ignore

logger = logging.getLogger(__name__)


class LikeService:
    """Like edges between users and posts."""

    def __init__(self, db: AsyncSession, posts: Optional[PostService] = None):
        self.db = db
        self.posts = posts or PostService(db)

    async def _target_post(self, user_id: int, post_id: int, action: str) -> PostWithAuthor:
        """Look up a post a user wants to (un)like; authors may not touch their own."""
        post = await self.posts.get_by_id(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        if post.author_id == user_id:
            raise ForbiddenError(f"Cannot {action} your own post")
        return post

    @store_operation
    async def like(self, user_id: int, post_id: int) -> LikeResult:
        """Like a post. Liking twice is a no-op reported as ``created=False``."""
        user_id = parse_id(user_id, "user id")
        post_id = parse_id(post_id, "post id")
        await self._target_post(user_id, post_id, "like")

        likes = Like.__table__
        result = await self.db.execute(
            insert_ignore(self.db, likes)
            .values(user_id=user_id, post_id=post_id)
            .returning(likes.c.user_id, likes.c.post_id, likes.c.created_at)
        )
        row = result.first()

        if row is None:
            logger.debug("User %s already liked post %s", user_id, post_id)
            return LikeResult(created=False)

        logger.info("User %s liked post %s", user_id, post_id)
        return LikeResult(created=True, like=LikeResponse.model_validate(row))

    @store_operation
    async def unlike(self, user_id: int, post_id: int) -> bool:
        """Remove a like. Returns whether one existed."""
        user_id = parse_id(user_id, "user id")
        post_id = parse_id(post_id, "post id")
        await self._target_post(user_id, post_id, "unlike")

        result = await self.db.execute(
            delete(Like).where(Like.user_id == user_id, Like.post_id == post_id)
        )
        removed = result.rowcount > 0

        if removed:
            logger.info("User %s unliked post %s", user_id, post_id)
        return removed

    @store_operation
    async def list_for_post(self, post_id: int, limit: int = 20, offset: int = 0) -> List[Liker]:
        """Users who liked a post, most recent like first."""
        post_id = parse_id(post_id, "post id")
        check_window(limit, offset)

        result = await self.db.execute(
            select(User.id, User.username, User.full_name, Like.created_at.label("liked_at"))
            .join(Like, Like.user_id == User.id)
            .join(Post, Post.id == Like.post_id)
            .where(Like.post_id == post_id, Post.is_deleted.is_(False))
            .order_by(Like.created_at.desc(), User.id.asc())
            .limit(limit)
            .offset(offset)
        )
        return [Liker.model_validate(row) for row in result.all()]

    @store_operation
    async def list_liked_posts(self, user_id: int, limit: int = 20, offset: int = 0) -> List[LikedPost]:
        """Posts a user has liked, ordered by when they liked them."""
        user_id = parse_id(user_id, "user id")
        check_window(limit, offset)

        result = await self.db.execute(
            select(Post, Like.created_at.label("liked_at"))
            .join(Like, Like.post_id == Post.id)
            .join(Post.author)
            .options(contains_eager(Post.author))
            .where(Like.user_id == user_id, Post.is_deleted.is_(False))
            .order_by(Like.created_at.desc(), Post.id.asc())
            .limit(limit)
            .offset(offset)
            .execution_options(populate_existing=True)
        )
        return [
            LikedPost(**PostWithAuthor.model_validate(post).model_dump(), liked_at=liked_at)
            for post, liked_at in result.all()
        ]

    @store_operation
    async def has_liked(self, user_id: int, post_id: int) -> bool:
        """Whether ``user_id`` currently likes ``post_id``."""
        user_id = parse_id(user_id, "user id")
        post_id = parse_id(post_id, "post id")

        liked = await self.db.scalar(
            select(exists().where(Like.user_id == user_id, Like.post_id == post_id))
        )
        return bool(liked)
