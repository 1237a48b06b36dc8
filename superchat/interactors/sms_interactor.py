# superchat/interactors/sms_interactor.py
import logging

from superchat.gateways.interfaces import ISmsLogGateway
from superchat.infrastructure import schemas
from superchat.infrastructure.sms import SmsSender

logger = logging.getLogger("SuperChatAPI.sms")


class SmsInteractor:
    def __init__(self, sms_gateway: ISmsLogGateway, sms_sender: SmsSender):
        self.sms_gateway = sms_gateway
        self.sms_sender = sms_sender

    async def send_sms(self, phone_number: str, message: str) -> schemas.SmsLog:
        """Send through the configured provider and record the attempt.

        A provider failure is recorded with status "failed" rather than raised.
        """
        delivery = await self.sms_sender.send(phone_number, message)
        if delivery.status != "sent":
            logger.warning(
                "SMS to %s via %s ended with status %s",
                phone_number,
                delivery.provider,
                delivery.status,
            )
        log = await self.sms_gateway.create_log(
            phone_number, message, delivery.request_id, delivery.status
        )
        return schemas.SmsLog.model_validate(log._model)

    async def list_logs(
        self, page: int = 1, limit: int = 20, search: str | None = None
    ) -> schemas.Page[schemas.SmsLog]:
        logs, total = await self.sms_gateway.get_all(page, limit, search)
        return schemas.Page[schemas.SmsLog](
            items=[schemas.SmsLog.model_validate(log._model) for log in logs],
            total_count=total,
            page=page,
            limit=limit,
        )
