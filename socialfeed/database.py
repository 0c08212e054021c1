import asyncio
import functools
import logging
from datetime import datetime, timezone
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from socialfeed.config import settings
from socialfeed.core.exceptions import StoreError

logger = logging.getLogger(__name__)


def _connect_args() -> dict:
    # asyncpg enforces a per-statement deadline; other drivers rely on the pool timeout
    if settings.database_url.startswith("postgresql+asyncpg"):
        return {"command_timeout": settings.db_statement_timeout}
    return {}


# Create async engine
engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_timeout=settings.db_pool_timeout,
    pool_pre_ping=True,
    connect_args=_connect_args(),
)

# Session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# Base class for models
class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    """Naive UTC timestamp used for created_at/updated_at columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def insert_ignore(session: AsyncSession, table):
    """Build an ``INSERT ... ON CONFLICT DO NOTHING`` for the session's dialect.

    The uniqueness constraint on ``table`` decides the outcome, so two
    concurrent inserts of the same key leave exactly one row and the loser
    gets no RETURNING row back.
    """
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        raise StoreError(f"Conflict-free insert is not supported on {dialect}")
    return insert(table).on_conflict_do_nothing()


def store_operation(func):
    """Turn datastore failures raised by a store method into StoreError.

    Domain errors raised by the method pass through unchanged.
    """
    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except (SQLAlchemyError, asyncio.TimeoutError) as exc:
            logger.error("Store failure in %s", func.__qualname__, exc_info=True)
            raise StoreError() from exc
    return wrapper


async def get_db() -> AsyncSession:
    """Dependency for getting database sessions."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db():
    """Initialize database tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db():
    """Dispose of pooled connections."""
    await engine.dispose()
