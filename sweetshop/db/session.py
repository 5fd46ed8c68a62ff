"""Async Session Factory — sessions outside FastAPI (scripts, test fixtures).

Invariants:
    - Same session options as DatabaseSessionManager (expire_on_commit=False)
    - Caller owns the engine: dispose via factory.kw["bind"]
"""

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker


def create_session_factory(
    database_url: str, **engine_kwargs,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory for the given database URL."""
    engine = create_async_engine(database_url, echo=False, **engine_kwargs)
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
