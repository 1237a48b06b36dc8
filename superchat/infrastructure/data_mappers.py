# superchat/infrastructure/data_mappers.py

from typing import Protocol, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from superchat.infrastructure.database import Base, guarded

ModelT_contra = TypeVar("ModelT_contra", contravariant=True)


class DataMapper(Protocol[ModelT_contra]):
    async def insert(self, model: ModelT_contra):
        raise NotImplementedError

    async def update(self, model: ModelT_contra):
        raise NotImplementedError


class SessionMapper(DataMapper[Base]):
    """Writes one model type through the request session.

    Each write is flushed immediately so constraint violations surface at the
    call site instead of at commit time.
    """

    def __init__(self, session: AsyncSession, timeout: float):
        self.session = session
        self.timeout = timeout

    async def insert(self, model: Base):
        self.session.add(model)
        await guarded(self.session.flush(), self.timeout)

    async def update(self, model: Base):
        await guarded(self.session.merge(model), self.timeout)
        await guarded(self.session.flush(), self.timeout)
