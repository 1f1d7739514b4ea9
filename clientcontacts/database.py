"""Engine, session factory and the per-request session dependency.

The engine is created once at import and shared by every request; handlers
get a session through ``Depends(get_db)``.
"""
from typing import AsyncGenerator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from clientcontacts.config import settings


def make_engine(url: str, **kwargs) -> AsyncEngine:
    kwargs.setdefault("echo", settings.SQL_ECHO)
    return create_async_engine(url, **kwargs)


def make_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    # Services read attributes after commit, so instances must not expire
    return async_sessionmaker(bind=bind, expire_on_commit=False, autoflush=False)


engine = make_engine(settings.SQLALCHEMY_DATABASE_URI)
AsyncSessionLocal = make_session_factory(engine)

Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except SQLAlchemyError:
            await session.rollback()
            raise
