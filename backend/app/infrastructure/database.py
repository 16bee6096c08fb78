"""Database Session Manager — one async engine per process, one session per request.

Invariants:
    - A session that exits with any exception is rolled back before it is closed
    - SQLAlchemy failures leave as DatabaseError (500); the driver text goes to the
      log only, never into the response
    - Unique violations the API promises to answer (duplicate email) are caught by
      the routes that expect them, inside the session, so they never reach here
    - Pool sizing applies to server databases; SQLite keeps the dialect's own pool

Design Decisions:
    - Singleton db_manager assigned in the FastAPI lifespan: importing this module
      opens no connection
    - expire_on_commit=False: handlers read ids off ORM objects after commit
    - health_check pings on a raw connection, outside the request session path
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from app.core.errors import DatabaseError

logger = logging.getLogger(__name__)


def to_database_error(exc: SQLAlchemyError) -> DatabaseError:
    """Translate a store failure into the client-safe 500."""
    if isinstance(exc, OperationalError):
        return DatabaseError("store unavailable", "connect")
    return DatabaseError("statement failed", "execute")


class DatabaseSessionManager:
    """Owns the engine and hands out request-scoped sessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_options = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_options.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_options)
        self.sessions = async_sessionmaker(self.engine, expire_on_commit=False)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self.sessions()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(
                f"Store failure, request rolled back: {e}",
                extra={"error_code": "DATABASE_ERROR"},
            )
            raise to_database_error(e) from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """True when a connection can be checked out and answers SELECT 1."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"DB health check failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> None:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    logger.info("Database engine created")


async def close_db() -> None:
    global db_manager
    if db_manager is not None:
        await db_manager.dispose()
        db_manager = None
        logger.info("Database engine disposed")


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if db_manager is None:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
