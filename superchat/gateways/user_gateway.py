# superchat/gateways/user_gateway.py
from uuid import UUID

from sqlalchemy import delete, or_, select, update

from superchat.gateways.base import BaseGateway
from superchat.gateways.interfaces import IUserGateway
from superchat.infrastructure import models, schemas
from superchat.infrastructure.uow import UoWModel


class UserGateway(BaseGateway, IUserGateway):
    models = (models.User,)

    async def get_user(self, user_id: UUID) -> UoWModel | None:
        stmt = (
            select(models.User)
            .filter(models.User.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self._execute(stmt)
        user = result.scalar_one_or_none()
        return UoWModel(user, self.uow) if user else None

    async def get_by_phone(self, phone_number: str) -> UoWModel | None:
        stmt = select(models.User).filter(models.User.phone_number == phone_number)
        result = await self._execute(stmt)
        user = result.scalar_one_or_none()
        return UoWModel(user, self.uow) if user else None

    async def get_existing_ids(self, user_ids: list[UUID]) -> set[UUID]:
        if not user_ids:
            return set()
        stmt = select(models.User.id).filter(models.User.id.in_(user_ids))
        result = await self._execute(stmt)
        return set(result.scalars().all())

    async def get_all(
        self, page: int = 1, limit: int = 20, search: str | None = None
    ) -> tuple[list[UoWModel], int]:
        stmt = select(models.User)
        if search:
            stmt = stmt.filter(
                or_(
                    self._contains(models.User.name, search),
                    self._contains(models.User.phone_number, search),
                )
            )
        stmt = stmt.order_by(models.User.created_at.desc(), models.User.id)
        users, total = await self._paginate(stmt, page, limit)
        return [UoWModel(user, self.uow) for user in users], total

    async def create_user(
        self, phone_number: str, name: str | None = None, email: str | None = None
    ) -> UoWModel:
        db_user = models.User(phone_number=phone_number, name=name, email=email)
        uow_user = self.uow.register_new(db_user)
        await self.uow.commit()
        return uow_user

    async def update_user(
        self, user: UoWModel, user_update: schemas.UserUpdate
    ) -> UoWModel:
        for key, value in user_update.model_dump(exclude_unset=True).items():
            setattr(user, key, value)
        await self.uow.commit()
        return user

    async def set_flags(self, user_id: UUID, **values: bool) -> UoWModel | None:
        stmt = (
            update(models.User)
            .where(models.User.id == user_id)
            .values(**values, updated_at=models.utcnow())
        )
        result = await self._execute(stmt)
        if result.rowcount == 0:
            return None
        return await self.get_user(user_id)

    async def delete_user(self, user_id: UUID) -> bool:
        stmt = delete(models.User).where(models.User.id == user_id)
        result = await self._execute(stmt)
        return result.rowcount > 0
