"""Database engine and request-scoped sessions."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from marketplace_api.config import Settings, get_settings


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the asyncpg engine from the pool settings."""
    return create_async_engine(
        settings.async_database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_pool_max_overflow,
        pool_recycle=settings.db_pool_recycle_seconds,
        pool_pre_ping=True,
        # SQL may carry user emails and identity ids
        echo=False,
    )


engine = build_engine(get_settings())

session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session for one request.

    The transaction is committed when the request succeeds. Any error,
    including a rejected domain operation, rolls back every change the
    request made.
    """
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        await session.commit()
