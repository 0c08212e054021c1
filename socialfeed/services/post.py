import logging
from typing import Optional, List, Union
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, or_
from sqlalchemy.orm import contains_eager
from socialfeed.models import Post, User
from socialfeed.schemas.post import PostCreate, PostUpdate, PostResponse, PostWithAuthor
from socialfeed.schemas.common import Updated, NotFoundOrUnauthorized
from socialfeed.core.pagination import check_window
from socialfeed.core.validation import parse_id, require_text
from socialfeed.database import store_operation, utcnow

logger = logging.getLogger(__name__)


class PostService:
    """Post service: create, read, owner-only update and soft delete, search."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _visible(self):
        """Non-deleted posts joined with their author in the same statement."""
        return (
            select(Post)
            .join(Post.author)
            .options(contains_eager(Post.author))
            .where(Post.is_deleted.is_(False))
            .execution_options(populate_existing=True)
        )

    async def _page(self, stmt, limit: int, offset: int) -> List[PostWithAuthor]:
        result = await self.db.execute(
            stmt.order_by(Post.created_at.desc(), Post.id.asc())
            .limit(limit)
            .offset(offset)
        )
        return [PostWithAuthor.model_validate(post) for post in result.scalars().all()]

    @store_operation
    async def create(self, author_id: int, data: PostCreate) -> PostResponse:
        """Create a new post."""
        author_id = parse_id(author_id, "user id")
        content = require_text(data.content)

        now = utcnow()
        post = Post(
            author_id=author_id,
            content=content,
            media_url=data.media_url,
            comments_enabled=data.comments_enabled,
            is_deleted=False,
            created_at=now,
            updated_at=now,
        )

        self.db.add(post)
        await self.db.flush()

        logger.info("User %s created post %s", author_id, post.id)
        return PostResponse.model_validate(post)

    @store_operation
    async def get_by_id(self, post_id: int) -> Optional[PostWithAuthor]:
        """Get a visible post with its author, or None."""
        post_id = parse_id(post_id, "post id")
        result = await self.db.execute(self._visible().where(Post.id == post_id))
        post = result.scalar_one_or_none()
        if post is None:
            return None
        return PostWithAuthor.model_validate(post)

    @store_operation
    async def list_by_author(
        self,
        author_id: int,
        limit: int = 20,
        offset: int = 0
    ) -> List[PostWithAuthor]:
        """Get an author's posts, newest first."""
        author_id = parse_id(author_id, "user id")
        check_window(limit, offset)
        return await self._page(
            self._visible().where(Post.author_id == author_id), limit, offset
        )

    @store_operation
    async def update(
        self,
        post_id: int,
        acting_user_id: int,
        data: PostUpdate
    ) -> Union[Updated[PostResponse], NotFoundOrUnauthorized]:
        """Partially update a post owned by ``acting_user_id``.

        Fields left as None keep their stored value. Existence, ownership and
        visibility are all part of the UPDATE's WHERE clause, so a missing
        post and someone else's post produce the same outcome.
        """
        post_id = parse_id(post_id, "post id")
        acting_user_id = parse_id(acting_user_id, "user id")

        values = data.model_dump(exclude_none=True)
        if "content" in values:
            values["content"] = require_text(values["content"])
        values["updated_at"] = utcnow()

        result = await self.db.execute(
            update(Post)
            .where(
                Post.id == post_id,
                Post.author_id == acting_user_id,
                Post.is_deleted.is_(False),
            )
            .values(**values)
            .returning(Post)
            .execution_options(synchronize_session="fetch")
        )
        post = result.scalar_one_or_none()
        if post is None:
            return NotFoundOrUnauthorized()

        logger.info("User %s updated post %s", acting_user_id, post_id)
        return Updated(row=PostResponse.model_validate(post))

    @store_operation
    async def soft_delete(self, post_id: int, acting_user_id: int) -> bool:
        """Hide a post owned by ``acting_user_id``. False if nothing matched."""
        post_id = parse_id(post_id, "post id")
        acting_user_id = parse_id(acting_user_id, "user id")

        result = await self.db.execute(
            update(Post)
            .where(
                Post.id == post_id,
                Post.author_id == acting_user_id,
                Post.is_deleted.is_(False),
            )
            .values(is_deleted=True, updated_at=utcnow())
            .returning(Post.id)
            .execution_options(synchronize_session="fetch")
        )
        deleted = result.scalar_one_or_none() is not None

        if deleted:
            logger.info("User %s deleted post %s", acting_user_id, post_id)
        return deleted

    @store_operation
    async def search(
        self,
        term: str,
        limit: int = 20,
        offset: int = 0
    ) -> List[PostWithAuthor]:
        """Case-insensitive match on content, author username or full name."""
        term = require_text(term, "Search term")
        check_window(limit, offset)

        stmt = self._visible().where(
            or_(
                Post.content.icontains(term, autoescape=True),
                User.username.icontains(term, autoescape=True),
                User.full_name.icontains(term, autoescape=True),
            )
        )
        return await self._page(stmt, limit, offset)
