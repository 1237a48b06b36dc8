# superchat/gateways/admin_gateway.py
from uuid import UUID

from sqlalchemy import or_, select

from superchat.gateways.base import BaseGateway
from superchat.gateways.interfaces import IAdminGateway
from superchat.infrastructure import models
from superchat.infrastructure.uow import UoWModel


class AdminGateway(BaseGateway, IAdminGateway):
    models = (models.Admin,)

    async def get_admin(self, admin_id: UUID) -> UoWModel | None:
        stmt = select(models.Admin).filter(models.Admin.id == admin_id)
        result = await self._execute(stmt)
        admin = result.scalar_one_or_none()
        return UoWModel(admin, self.uow) if admin else None

    async def get_by_identifier(self, identifier: str) -> UoWModel | None:
        stmt = select(models.Admin).filter(
            or_(models.Admin.username == identifier, models.Admin.email == identifier)
        )
        result = await self._execute(stmt)
        admin = result.scalars().first()
        return UoWModel(admin, self.uow) if admin else None

    async def create_admin(self, username: str, email: str, password_hash: str) -> UoWModel:
        admin = models.Admin(username=username, email=email, password_hash=password_hash)
        uow_admin = self.uow.register_new(admin)
        await self.uow.commit()
        return uow_admin

