from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base

from .config import Settings

Base = declarative_base()


def create_engine(settings: Settings) -> AsyncEngine:
    """Build the async engine for the configured database."""
    # Supabase/PostgreSQL with PgBouncer needs statement_cache_size=0
    # SQLite doesn't support these parameters
    connect_args = {}
    engine_kwargs = {}
    if "postgresql" in settings.database_url:
        connect_args = {
            "statement_cache_size": 0,
            "prepared_statement_cache_size": 0,
        }
        engine_kwargs = {
            "pool_size": 20,
            "max_overflow": 30,
        }

    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        connect_args=connect_args,
        pool_pre_ping=True,  # Verify connections before use
        pool_recycle=300,    # Recycle connections every 5 minutes
        **engine_kwargs,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: AsyncEngine):
    # Register every mapped table before create_all
    from . import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
