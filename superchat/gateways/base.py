# superchat/gateways/base.py
from typing import Any, ClassVar

from sqlalchemy import Select, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from superchat.domain import errors
from superchat.infrastructure.data_mappers import SessionMapper
from superchat.infrastructure.database import guarded
from superchat.infrastructure.uow import UnitOfWork


class BaseGateway:
    # ORM classes this gateway writes through the unit of work
    models: ClassVar[tuple[type, ...]] = ()

    def __init__(self, session: AsyncSession, uow: UnitOfWork):
        self.session = session
        self.uow = uow
        self.timeout = uow.timeout
        for model in self.models:
            uow.mappers[model] = SessionMapper(session, uow.timeout)

    async def _execute(self, stmt) -> Any:
        return await guarded(self.session.execute(stmt), self.timeout)

    async def _scalar(self, stmt) -> Any:
        return await guarded(self.session.scalar(stmt), self.timeout)

    async def _count(self, stmt: Select) -> int:
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        return (await self._scalar(count_stmt)) or 0

    async def _paginate(self, stmt: Select, page: int, limit: int) -> tuple[list[Any], int]:
        total = await self._count(stmt)
        result = await self._execute(stmt.offset((page - 1) * limit).limit(limit))
        return list(result.scalars().all()), total

    @staticmethod
    def _contains(column, term: str):
        """Case-insensitive substring match with % and _ taken literally."""
        escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        return column.ilike(f"%{escaped}%", escape="\\")

    def _insert(self, model: type):
        """Dialect insert on the model's table, needed for ON CONFLICT clauses."""
        table = model.__table__
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert(table)
        if dialect == "sqlite":
            return sqlite.insert(table)
        raise errors.StorageFailureError(f"Unsupported database dialect: {dialect}")

    async def rollback(self) -> None:
        self.uow.discard()
        await guarded(self.session.rollback(), self.timeout)
