# superchat/gateways/notification_gateway.py
from uuid import UUID

from sqlalchemy import delete, select

from superchat.gateways.base import BaseGateway
from superchat.gateways.interfaces import INotificationTokenGateway
from superchat.infrastructure import models
from superchat.infrastructure.uow import UoWModel


class NotificationTokenGateway(BaseGateway, INotificationTokenGateway):
    async def get_by_token(self, token: str) -> UoWModel | None:
        stmt = (
            select(models.NotificationToken)
            .filter(models.NotificationToken.token == token)
            .execution_options(populate_existing=True)
        )
        result = await self._execute(stmt)
        db_token = result.scalar_one_or_none()
        return UoWModel(db_token, self.uow) if db_token else None

    async def upsert(self, user_id: UUID, token: str, device_id: str | None) -> UoWModel:
        """Register a device token; an existing token moves to the latest caller."""
        stmt = self._insert(models.NotificationToken).values(
            user_id=user_id, token=token, device_id=device_id
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["token"],
            set_={"user_id": stmt.excluded.user_id, "device_id": stmt.excluded.device_id},
        )
        await self._execute(stmt)
        return await self.get_by_token(token)

    async def list_for_user(self, user_id: UUID) -> list[UoWModel]:
        stmt = (
            select(models.NotificationToken)
            .filter(models.NotificationToken.user_id == user_id)
            .order_by(models.NotificationToken.created_at.desc())
        )
        result = await self._execute(stmt)
        return [UoWModel(row, self.uow) for row in result.scalars().all()]

    async def delete(self, user_id: UUID, token: str) -> bool:
        stmt = delete(models.NotificationToken).where(
            models.NotificationToken.user_id == user_id,
            models.NotificationToken.token == token,
        )
        result = await self._execute(stmt)
        return result.rowcount > 0
