import pytest
from socialfeed.core.exceptions import NotFoundError, ForbiddenError, ValidationError
from socialfeed.schemas.post import PostCreate
from socialfeed.services.like import LikeService
from socialfeed.services.post import PostService


@pytest.fixture
async def post(db_session, users):
    """A post by alice."""
    alice, _, _ = users
    return await PostService(db_session).create(alice.id, PostCreate(content="Like me"))


class TestLikeService:
    """Like edge tests."""

    @pytest.mark.asyncio
    async def test_like_post(self, db_session, users, post):
        """Test liking a post creates one edge."""
        _, bob, _ = users
        service = LikeService(db_session)

        result = await service.like(bob.id, post.id)

        assert result.created is True
        assert result.already_liked is False
        assert result.like.user_id == bob.id
        assert result.like.post_id == post.id
        assert await service.has_liked(bob.id, post.id) is True

    @pytest.mark.asyncio
    async def test_like_twice_is_idempotent(self, db_session, users, post):
        """Test that a second like reports the existing edge."""
        _, bob, _ = users
        service = LikeService(db_session)

        await service.like(bob.id, post.id)
        second = await service.like(bob.id, post.id)

        assert second.created is False
        assert second.already_liked is True
        assert second.like is None
        assert len(await service.list_for_post(post.id)) == 1

    @pytest.mark.asyncio
    async def test_cannot_like_own_post(self, db_session, users, post):
        """Test that authors cannot like their own posts."""
        alice, _, _ = users
        service = LikeService(db_session)

        with pytest.raises(ForbiddenError):
            await service.like(alice.id, post.id)

        assert await service.has_liked(alice.id, post.id) is False

    @pytest.mark.asyncio
    async def test_like_missing_post(self, db_session, users):
        """Test liking a post that does not exist."""
        _, bob, _ = users
        service = LikeService(db_session)

        with pytest.raises(NotFoundError):
            await service.like(bob.id, 99999)

    @pytest.mark.asyncio
    async def test_like_deleted_post(self, db_session, users, post):
        """Test that deleted posts cannot be liked."""
        alice, bob, _ = users
        await PostService(db_session).soft_delete(post.id, alice.id)
        service = LikeService(db_session)

        with pytest.raises(NotFoundError):
            await service.like(bob.id, post.id)

    @pytest.mark.asyncio
    async def test_like_malformed_id(self, db_session, users):
        _, bob, _ = users
        service = LikeService(db_session)

        with pytest.raises(ValidationError):
            await service.like(bob.id, "not-a-number")

    @pytest.mark.asyncio
    async def test_unlike(self, db_session, users, post):
        """Test removing a like."""
        _, bob, _ = users
        service = LikeService(db_session)
        await service.like(bob.id, post.id)

        assert await service.unlike(bob.id, post.id) is True
        assert await service.has_liked(bob.id, post.id) is False
        assert await service.unlike(bob.id, post.id) is False

    @pytest.mark.asyncio
    async def test_list_for_post(self, db_session, users, post):
        """Test listing likers, most recent first."""
        _, bob, carol = users
        service = LikeService(db_session)
        await service.like(bob.id, post.id)
        await service.like(carol.id, post.id)

        likers = await service.list_for_post(post.id, limit=20, offset=0)

        assert [u.username for u in likers] == ["carol", "bob"]
        assert likers[0].full_name == "Carol Cruz"

    @pytest.mark.asyncio
    async def test_list_liked_posts(self, db_session, users):
        """Test listing posts a user liked, ordered by like time."""
        alice, bob, carol = users
        posts = PostService(db_session)
        older = await posts.create(alice.id, PostCreate(content="older post"))
        newer = await posts.create(carol.id, PostCreate(content="newer post"))
        service = LikeService(db_session)

        # Like the newer post first so like time and post time disagree
        await service.like(bob.id, newer.id)
        await service.like(bob.id, older.id)

        liked = await service.list_liked_posts(bob.id, limit=20, offset=0)

        assert [p.id for p in liked] == [older.id, newer.id]
        assert liked[0].author.username == "alice"
        assert liked[0].liked_at >= liked[1].liked_at

    @pytest.mark.asyncio
    async def test_liked_posts_skip_deleted(self, db_session, users, post):
        """Test that deleted posts drop out of like listings."""
        alice, bob, _ = users
        service = LikeService(db_session)
        await service.like(bob.id, post.id)
        await PostService(db_session).soft_delete(post.id, alice.id)

        assert await service.list_liked_posts(bob.id) == []
        assert await service.list_for_post(post.id) == []
