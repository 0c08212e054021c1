import logging
from typing import Optional, List, Union
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from sqlalchemy.orm import contains_eager
from socialfeed.models import Comment
from socialfeed.schemas.comment import CommentResponse, CommentWithAuthor
from socialfeed.schemas.common import Updated, NotFoundOrUnauthorized
from socialfeed.schemas.post import PostWithAuthor
from socialfeed.services.post import PostService
from socialfeed.core.exceptions import NotFoundError, ForbiddenError
from socialfeed.core.pagination import check_window
from socialfeed.core.validation import parse_id, require_text
from socialfeed.database import store_operation, utcnow

logger = logging.getLogger(__name__)


class CommentService:
    """Comments on posts.

    Creating and listing both go through the parent post: it must be visible
    and have comments enabled at the time of the call. Turning comments off
    hides the thread from fresh listings but leaves the rows untouched.
    """

    def __init__(self, db: AsyncSession, posts: Optional[PostService] = None):
        self.db = db
        self.posts = posts or PostService(db)

    async def _open_thread(self, post_id: int) -> PostWithAuthor:
        post = await self.posts.get_by_id(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        if not post.comments_enabled:
            raise ForbiddenError("Comments are disabled for this post")
        return post

    @store_operation
    async def create(self, post_id: int, author_id: int, content: str) -> CommentResponse:
        """Add a comment to a post."""
        post_id = parse_id(post_id, "post id")
        author_id = parse_id(author_id, "user id")
        content = require_text(content)

        await self._open_thread(post_id)

        now = utcnow()
        comment = Comment(
            post_id=post_id,
            author_id=author_id,
            content=content,
            is_deleted=False,
            created_at=now,
            updated_at=now,
        )
        self.db.add(comment)
        await self.db.flush()

        logger.info("User %s commented %s on post %s", author_id, comment.id, post_id)
        return CommentResponse.model_validate(comment)

    @store_operation
    async def get_by_id(self, comment_id: int) -> Optional[CommentWithAuthor]:
        comment_id = parse_id(comment_id, "comment id")
        result = await self.db.execute(
            select(Comment)
            .join(Comment.author)
            .options(contains_eager(Comment.author))
            .where(Comment.id == comment_id, Comment.is_deleted.is_(False))
            .execution_options(populate_existing=True)
        )
        comment = result.scalar_one_or_none()
        return CommentWithAuthor.model_validate(comment) if comment else None

    @store_operation
    async def update(
        self,
        comment_id: int,
        acting_user_id: int,
        content: str
    ) -> Union[Updated[CommentResponse], NotFoundOrUnauthorized]:
        """Edit a comment owned by ``acting_user_id``."""
        comment_id = parse_id(comment_id, "comment id")
        acting_user_id = parse_id(acting_user_id, "user id")
        content = require_text(content)

        result = await self.db.execute(
            update(Comment)
            .where(
                Comment.id == comment_id,
                Comment.author_id == acting_user_id,
                Comment.is_deleted.is_(False),
            )
            .values(content=content, updated_at=utcnow())
            .returning(Comment)
            .execution_options(synchronize_session="fetch")
        )
        comment = result.scalar_one_or_none()
        if comment is None:
            return NotFoundOrUnauthorized()

        logger.info("User %s updated comment %s", acting_user_id, comment_id)
        return Updated(row=CommentResponse.model_validate(comment))

    @store_operation
    async def delete(self, comment_id: int, acting_user_id: int) -> bool:
        """Soft-delete a comment owned by ``acting_user_id``."""
        comment_id = parse_id(comment_id, "comment id")
        acting_user_id = parse_id(acting_user_id, "user id")

        result = await self.db.execute(
            update(Comment)
            .where(
                Comment.id == comment_id,
                Comment.author_id == acting_user_id,
                Comment.is_deleted.is_(False),
            )
            .values(is_deleted=True, updated_at=utcnow())
            .returning(Comment.id)
            .execution_options(synchronize_session="fetch")
        )
        deleted = result.scalar_one_or_none() is not None

        if deleted:
            logger.info("User %s deleted comment %s", acting_user_id, comment_id)
        return deleted

    @store_operation
    async def list_for_post(
        self,
        post_id: int,
        limit: int = 20,
        offset: int = 0
    ) -> List[CommentWithAuthor]:
        """Visible comments on an open thread, newest first."""
        post_id = parse_id(post_id, "post id")
        check_window(limit, offset)

        await self._open_thread(post_id)

        result = await self.db.execute(
            select(Comment)
            .join(Comment.author)
            .options(contains_eager(Comment.author))
            .where(Comment.post_id == post_id, Comment.is_deleted.is_(False))
            .order_by(Comment.created_at.desc(), Comment.id.asc())
            .limit(limit)
            .offset(offset)
            .execution_options(populate_existing=True)
        )
        return [CommentWithAuthor.model_validate(c) for c in result.scalars().all()]
