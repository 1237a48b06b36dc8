# superchat/gateways/otp_gateway.py
from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select

from superchat.gateways.base import BaseGateway
from superchat.gateways.interfaces import IOtpGateway
from superchat.infrastructure import models
from superchat.infrastructure.uow import UoWModel


class OtpGateway(BaseGateway, IOtpGateway):
    models = (models.Otp,)

    async def create_otp(
        self,
        phone_number: str,
        otp_code: str,
        expires_at: datetime,
        user_id: UUID | None = None,
    ) -> UoWModel:
        otp = models.Otp(
            phone_number=phone_number,
            otp_code=otp_code,
            expires_at=expires_at,
            user_id=user_id,
        )
        uow_otp = self.uow.register_new(otp)
        await self.uow.commit()
        return uow_otp

    async def get_valid_otp(self, phone_number: str, otp_code: str) -> UoWModel | None:
        stmt = (
            select(models.Otp)
            .filter(
                models.Otp.phone_number == phone_number,
                models.Otp.otp_code == otp_code,
                models.Otp.expires_at > models.utcnow(),
            )
            .order_by(models.Otp.created_at.desc())
            .limit(1)
        )
        result = await self._execute(stmt)
        otp = result.scalar_one_or_none()
        return UoWModel(otp, self.uow) if otp else None

    async def delete_for_phone(self, phone_number: str) -> int:
        stmt = delete(models.Otp).where(models.Otp.phone_number == phone_number)
        result = await self._execute(stmt)
        return result.rowcount
