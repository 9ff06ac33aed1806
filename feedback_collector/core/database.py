"""Feedback Collector Database Configuration - Async SQLAlchemy."""

from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from feedback_collector.core.config import Settings, settings

# Pool sizing bounds concurrent database work; there are no application locks.
# - DB_POOL_SIZE: connections kept open in the pool (default: 10)
# - DB_MAX_OVERFLOW: extra connections allowed under load (default: 10)
# - DB_POOL_TIMEOUT: seconds to wait for a free connection (default: 30)
# - DB_POOL_RECYCLE: maximum connection lifetime in seconds (default: 1800)


def create_engine_from_settings(config: Settings) -> AsyncEngine:
    """Create the async engine with a bounded connection pool."""
    return create_async_engine(
        config.database_url,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_timeout=config.db_pool_timeout,
        pool_recycle=config.db_pool_recycle,
        pool_pre_ping=True,
        echo=config.debug and config.log_level == "DEBUG",
    )


engine = create_engine_from_settings(settings)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# Base class for models
Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency to get a request-scoped database session."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except BaseException:
            # BaseException so cancellation also rolls back
            await session.rollback()
            raise


async def check_db_connection() -> bool:
    """Check if database is reachable."""
    try:
        async with async_session_maker() as session:
            await session.execute(text("SELECT 1"))
            return True
    except (OSError, ConnectionError) as e:
        from feedback_collector.core.logging import get_logger

        get_logger("database").debug(f"Database connection check failed: {e}")
        return False
    except Exception as e:
        from feedback_collector.core.logging import get_logger

        get_logger("database").warning(f"Unexpected error checking database connection: {e}")
        return False
