# superchat/infrastructure/database.py
import asyncio
import logging
from collections.abc import Awaitable
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional, TypeVar

from sqlalchemy import event
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from superchat.domain import errors

logger = logging.getLogger("SuperChatAPI.storage")

T = TypeVar("T")


class Base(DeclarativeBase):
    pass


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """SQLite ignores ON DELETE clauses unless the pragma is set per connection."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


async def guarded(awaitable: Awaitable[T], timeout: float) -> T:
    """Await a storage call under a timeout and translate driver failures.

    Zero-row results are not failures and pass through untouched; callers decide
    whether they mean "not found".
    """
    try:
        return await asyncio.wait_for(awaitable, timeout)
    except asyncio.TimeoutError as exc:
        logger.warning("Storage call exceeded %.2fs", timeout)
        raise errors.StorageTimeoutError() from exc
    except IntegrityError as exc:
        logger.info("Integrity violation: %s", exc.orig)
        raise errors.ConflictError() from exc
    except OperationalError as exc:
        logger.warning("Transient storage error: %s", exc.orig)
        raise errors.TransientStorageError() from exc
    except SQLAlchemyError as exc:
        logger.error("Storage failure: %s", exc)
        raise errors.StorageFailureError() from exc


class Database:
    def __init__(
        self,
        engine: AsyncEngine,
        session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
    ):
        self.engine = engine
        enable_sqlite_foreign_keys(engine)
        self.SessionLocal = session_factory or async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    async def connect(self) -> None:
        async with self.engine.begin() as conn:
            import superchat.infrastructure.models  # noqa: F401

            await conn.run_sync(Base.metadata.create_all)

    async def disconnect(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self.SessionLocal() as session:
            yield session


def create_database(
    engine: AsyncEngine,
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
) -> Database:
    return Database(engine, session_factory)
