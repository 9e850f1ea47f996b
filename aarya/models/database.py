"""
Async SQLAlchemy engine, session factory, and base model.
"""

from typing import Tuple

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from aarya.config import settings


class Base(DeclarativeBase):
    pass


def create_session_factory(database_url: str, echo: bool = False) -> Tuple[AsyncEngine, async_sessionmaker]:
    engine_kwargs = {"echo": echo}

    # SQLite doesn't support pool_size/max_overflow
    if "sqlite" not in database_url:
        engine_kwargs.update({"pool_size": 20, "max_overflow": 10, "pool_pre_ping": True})

    engine = create_async_engine(database_url, **engine_kwargs)
    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    return engine, session_factory


def default_session_factory() -> Tuple[AsyncEngine, async_sessionmaker]:
    return create_session_factory(settings.DATABASE_URL, echo=settings.DEBUG)


async def init_db(engine: AsyncEngine) -> None:
    """Create all tables (for development convenience)."""
    async with engine.begin() as conn:
        from aarya.models.entities import KnowledgeRecord  # noqa
        await conn.run_sync(Base.metadata.create_all)
