import asyncio
import logging
import pytest
from sqlalchemy.exc import OperationalError
from socialfeed.core.exceptions import StoreError, NotFoundError
from socialfeed.database import store_operation
from socialfeed.services.follow import FollowService
from socialfeed.services.post import PostService


class FailingSession:
    """Stand-in session whose every statement fails."""

    def __init__(self, exc):
        self.exc = exc

    async def execute(self, *args, **kwargs):
        raise self.exc

    async def scalar(self, *args, **kwargs):
        raise self.exc


class TestStoreErrors:
    """Datastore failure handling tests."""

    @pytest.mark.asyncio
    async def test_driver_error_becomes_store_error(self, caplog):
        """Test that driver failures surface as StoreError and are logged."""
        session = FailingSession(OperationalError("SELECT 1", {}, Exception("connection lost")))
        service = PostService(session)

        with caplog.at_level(logging.ERROR, logger="socialfeed.database"):
            with pytest.raises(StoreError) as exc_info:
                await service.get_by_id(1)

        assert exc_info.value.message == "Internal server error"
        assert isinstance(exc_info.value.__cause__, OperationalError)
        assert "PostService.get_by_id" in caplog.text

    @pytest.mark.asyncio
    async def test_timeout_becomes_store_error(self):
        """Test that a timed out statement surfaces as an error instead of hanging."""
        service = FollowService(FailingSession(asyncio.TimeoutError()))

        with pytest.raises(StoreError):
            await service.is_following(1, 2)

    @pytest.mark.asyncio
    async def test_domain_errors_pass_through(self):
        """Test that domain errors are not rewrapped."""

        @store_operation
        async def lookup():
            raise NotFoundError("Post not found")

        with pytest.raises(NotFoundError):
            await lookup()
