import pytest
from socialfeed.core.exceptions import NotFoundError, ForbiddenError, ValidationError
from socialfeed.schemas.common import Updated, NotFoundOrUnauthorized
from socialfeed.schemas.post import PostCreate, PostUpdate
from socialfeed.services.comment import CommentService
from socialfeed.services.post import PostService


@pytest.fixture
async def post(db_session, users):
    """A post by alice with comments enabled."""
    alice, _, _ = users
    return await PostService(db_session).create(alice.id, PostCreate(content="Discuss"))


class TestCommentService:
    """Comment tests."""

    @pytest.mark.asyncio
    async def test_create_comment(self, db_session, users, post):
        """Test commenting on an open post."""
        _, bob, _ = users
        service = CommentService(db_session)

        comment = await service.create(post.id, bob.id, "  Nice one  ")

        assert comment.id is not None
        assert comment.post_id == post.id
        assert comment.author_id == bob.id
        assert comment.content == "Nice one"
        assert comment.created_at == comment.updated_at

    @pytest.mark.asyncio
    async def test_create_empty_comment(self, db_session, users, post):
        _, bob, _ = users
        service = CommentService(db_session)

        with pytest.raises(ValidationError):
            await service.create(post.id, bob.id, "   ")

    @pytest.mark.asyncio
    async def test_comment_on_missing_post(self, db_session, users):
        _, bob, _ = users
        service = CommentService(db_session)

        with pytest.raises(NotFoundError):
            await service.create(99999, bob.id, "Hello?")

    @pytest.mark.asyncio
    async def test_disabled_comments_block_everyone(self, db_session, users, post):
        """Test that disabled comments reject even the post's author."""
        alice, bob, _ = users
        await PostService(db_session).update(
            post.id, alice.id, PostUpdate(comments_enabled=False)
        )
        service = CommentService(db_session)

        with pytest.raises(ForbiddenError):
            await service.create(post.id, bob.id, "Let me in")
        with pytest.raises(ForbiddenError):
            await service.create(post.id, alice.id, "My own post")

    @pytest.mark.asyncio
    async def test_disabling_hides_existing_thread(self, db_session, users, post):
        """Test that existing comments survive but are not listed while disabled."""
        alice, bob, _ = users
        posts = PostService(db_session)
        service = CommentService(db_session)
        comment = await service.create(post.id, bob.id, "Before the lock")

        await posts.update(post.id, alice.id, PostUpdate(comments_enabled=False))

        with pytest.raises(ForbiddenError):
            await service.list_for_post(post.id)
        assert (await service.get_by_id(comment.id)).content == "Before the lock"

        await posts.update(post.id, alice.id, PostUpdate(comments_enabled=True))
        comments = await service.list_for_post(post.id)
        assert [c.id for c in comments] == [comment.id]

    @pytest.mark.asyncio
    async def test_list_for_post(self, db_session, users, post):
        """Test listing comments newest first with authors."""
        _, bob, carol = users
        service = CommentService(db_session)
        await service.create(post.id, bob.id, "first")
        await service.create(post.id, carol.id, "second")

        comments = await service.list_for_post(post.id, limit=20, offset=0)

        assert [c.content for c in comments] == ["second", "first"]
        assert comments[0].author.username == "carol"

    @pytest.mark.asyncio
    async def test_update_comment(self, db_session, users, post):
        """Test that only the author can edit a comment."""
        _, bob, carol = users
        service = CommentService(db_session)
        comment = await service.create(post.id, bob.id, "typo")

        denied = await service.update(comment.id, carol.id, "vandalized")
        outcome = await service.update(comment.id, bob.id, "fixed")

        assert isinstance(denied, NotFoundOrUnauthorized)
        assert isinstance(outcome, Updated)
        assert outcome.row.content == "fixed"
        assert outcome.row.created_at == comment.created_at

    @pytest.mark.asyncio
    async def test_delete_comment(self, db_session, users, post):
        """Test soft deleting a comment."""
        _, bob, carol = users
        service = CommentService(db_session)
        comment = await service.create(post.id, bob.id, "short-lived")

        assert await service.delete(comment.id, carol.id) is False
        assert await service.delete(comment.id, bob.id) is True
        assert await service.delete(comment.id, bob.id) is False

        assert await service.get_by_id(comment.id) is None
        assert await service.list_for_post(post.id) == []
        assert isinstance(
            await service.update(comment.id, bob.id, "revived"), NotFoundOrUnauthorized
        )
