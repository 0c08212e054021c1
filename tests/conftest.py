from itertools import count
from typing import AsyncGenerator
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool

from socialfeed.main import app
from socialfeed.database import Base, get_db
from socialfeed.core.dependencies import (
    Principal, get_current_principal, get_current_principal_optional
)
from socialfeed.models import User

# SQLite supports ON CONFLICT DO NOTHING and RETURNING, which the stores rely on
TEST_DATABASE_URL = "sqlite+aiosqlite:///./test_socialfeed.db"

# Create test engine
test_engine = create_async_engine(
    TEST_DATABASE_URL,
    poolclass=NullPool,
)

TestSessionLocal = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@pytest.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    async with TestSessionLocal() as session:
        yield session
    
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def make_user(db_session: AsyncSession):
    """Factory inserting user rows directly; accounts are created outside the core."""
    numbers = count(1)

    async def _make_user(username: str = None, full_name: str = None) -> User:
        n = next(numbers)
        username = username or f"user{n}"
        user = User(
            username=username,
            email=f"{username}@example.com",
            password_digest="not-a-real-digest",
            full_name=full_name if full_name is not None else f"User {n}",
        )
        db_session.add(user)
        await db_session.flush()
        return user

    return _make_user


@pytest.fixture
async def users(make_user):
    """Three users: alice, bob and carol."""
    alice = await make_user("alice", "Alice Anders")
    bob = await make_user("bob", "Bob Brown")
    carol = await make_user("carol", "Carol Cruz")
    return alice, bob, carol


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden dependencies."""
    
    async def override_get_db():
        yield db_session
    
    app.dependency_overrides[get_db] = override_get_db
    
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac
    
    app.dependency_overrides.clear()


@pytest.fixture
def act_as(client: AsyncClient):
    """Authenticate subsequent requests as the given user id."""

    def _act_as(user_id: int) -> None:
        principal = Principal(id=user_id)
        app.dependency_overrides[get_current_principal] = lambda: principal
        app.dependency_overrides[get_current_principal_optional] = lambda: principal

    return _act_as
