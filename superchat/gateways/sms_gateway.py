# superchat/gateways/sms_gateway.py
from sqlalchemy import or_, select

from superchat.gateways.base import BaseGateway
from superchat.gateways.interfaces import ISmsLogGateway
from superchat.infrastructure import models
from superchat.infrastructure.uow import UoWModel


class SmsLogGateway(BaseGateway, ISmsLogGateway):
    models = (models.SmsLog,)

    async def create_log(
        self,
        phone_number: str,
        message: str,
        request_id: str | None,
        status: str | None,
    ) -> UoWModel:
        log = models.SmsLog(
            phone_number=phone_number,
            message=message,
            request_id=request_id,
            status=status,
        )
        uow_log = self.uow.register_new(log)
        await self.uow.commit()
        return uow_log

    async def get_all(
        self, page: int = 1, limit: int = 20, search: str | None = None
    ) -> tuple[list[UoWModel], int]:
        stmt = select(models.SmsLog)
        if search:
            stmt = stmt.filter(
                or_(
                    self._contains(models.SmsLog.phone_number, search),
                    self._contains(models.SmsLog.message, search),
                )
            )
        stmt = stmt.order_by(models.SmsLog.created_at.desc(), models.SmsLog.id)
        logs, total = await self._paginate(stmt, page, limit)
        return [UoWModel(log, self.uow) for log in logs], total
