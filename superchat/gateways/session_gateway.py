# superchat/gateways/session_gateway.py
from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select

from superchat.gateways.base import BaseGateway
from superchat.gateways.interfaces import ISessionGateway
from superchat.infrastructure import models
from superchat.infrastructure.uow import UoWModel


class SessionGateway(BaseGateway, ISessionGateway):
    models = (models.Session,)

    async def create_session(
        self, user_id: UUID, token: str, expires_at: datetime
    ) -> UoWModel:
        db_session = models.Session(user_id=user_id, token=token, expires_at=expires_at)
        uow_session = self.uow.register_new(db_session)
        await self.uow.commit()
        return uow_session

    async def get_active_session(self, token: str) -> UoWModel | None:
        # expiry is compared in SQL; SQLite hands back naive datetimes
        stmt = (
            select(models.Session)
            .filter(
                models.Session.token == token,
                models.Session.expires_at > models.utcnow(),
            )
            .limit(1)
        )
        result = await self._execute(stmt)
        db_session = result.scalar_one_or_none()
        return UoWModel(db_session, self.uow) if db_session else None

    async def delete_by_token(self, token: str) -> bool:
        stmt = delete(models.Session).where(models.Session.token == token)
        result = await self._execute(stmt)
        return result.rowcount > 0

    async def delete_for_user(self, user_id: UUID) -> int:
        stmt = delete(models.Session).where(models.Session.user_id == user_id)
        result = await self._execute(stmt)
        return result.rowcount

