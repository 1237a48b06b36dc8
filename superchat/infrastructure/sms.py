# superchat/infrastructure/sms.py
import logging
import uuid
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger("SuperChatAPI.sms")


@dataclass(frozen=True)
class SmsDelivery:
    provider: str
    request_id: str | None
    status: str


class SmsSender(Protocol):
    provider_code: str

    async def send(self, phone_number: str, message: str) -> SmsDelivery:
        ...


class ConsoleSmsSender:
    """Writes outgoing SMS to the log instead of a carrier. Used in dev and tests."""

    provider_code = "console"

    def __init__(self, sender_id: str):
        self.sender_id = sender_id

    async def send(self, phone_number: str, message: str) -> SmsDelivery:
        request_id = uuid.uuid4().hex
        logger.info(
            "SMS from %s to %s (request %s): %s",
            self.sender_id,
            phone_number,
            request_id,
            message,
        )
        return SmsDelivery(provider=self.provider_code, request_id=request_id, status="sent")


class DisabledSmsSender:
    provider_code = "none"

    async def send(self, phone_number: str, message: str) -> SmsDelivery:
        logger.warning("SMS provider disabled, dropping message to %s", phone_number)
        return SmsDelivery(provider=self.provider_code, request_id=None, status="failed")


def get_sms_sender(provider_code: str, sender_id: str) -> SmsSender:
    code = (provider_code or "none").strip().lower()
    if code == "console":
        return ConsoleSmsSender(sender_id)
    return DisabledSmsSender()
