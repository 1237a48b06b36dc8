# superchat/gateways/message_gateway.py
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.orm import contains_eager

from superchat.gateways.base import BaseGateway
from superchat.gateways.interfaces import IMessageGateway
from superchat.infrastructure import models, schemas
from superchat.infrastructure.uow import UoWModel


class MessageGateway(BaseGateway, IMessageGateway):
    models = (models.Message,)

    async def get_group_recipient_ids(self, group_id: UUID, sender_id: UUID) -> list[UUID]:
        stmt = (
            select(models.GroupMember.user_id)
            .filter(
                models.GroupMember.group_id == group_id,
                models.GroupMember.user_id != sender_id,
            )
            .order_by(models.GroupMember.joined_at)
        )
        result = await self._execute(stmt)
        return list(result.scalars().all())

    async def create_message(
        self, message: schemas.MessageCreate, sender_id: UUID
    ) -> UoWModel:
        """Insert the message together with one inbox row per recipient.

        Group recipients are the members at the moment of sending, the sender
        excluded. Both inserts happen in the same flush.
        """
        if message.group_id is not None:
            recipient_ids = await self.get_group_recipient_ids(message.group_id, sender_id)
        else:
            recipient_ids = [message.to_id]

        db_message = models.Message(
            from_id=sender_id,
            to_id=message.to_id,
            group_id=message.group_id,
            content=message.content,
            meta=message.metadata,
            type=int(message.type),
        )
        for recipient_id in recipient_ids:
            db_message.recipients.append(models.UserMessage(user_id=recipient_id))

        uow_message = self.uow.register_new(db_message)
        await self.uow.commit()
        return uow_message

    async def mark_read(self, user_id: UUID, message_id: UUID) -> bool:
        stmt = (
            update(models.UserMessage)
            .where(
                models.UserMessage.user_id == user_id,
                models.UserMessage.message_id == message_id,
            )
            .values(is_read=True)
        )
        result = await self._execute(stmt)
        return result.rowcount > 0

    async def get_inbox(
        self, user_id: UUID, page: int = 1, limit: int = 20
    ) -> tuple[list[UoWModel], int]:
        total = await self._scalar(
            select(func.count())
            .select_from(models.UserMessage)
            .where(models.UserMessage.user_id == user_id)
        )
        stmt = (
            select(models.UserMessage)
            .join(models.UserMessage.message)
            .options(contains_eager(models.UserMessage.message))
            .where(models.UserMessage.user_id == user_id)
            .order_by(models.Message.created_at.desc(), models.Message.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self._execute(stmt)
        rows = result.scalars().all()
        return [UoWModel(row, self.uow) for row in rows], total or 0

    async def unread_count(self, user_id: UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(models.UserMessage)
            .where(
                models.UserMessage.user_id == user_id,
                models.UserMessage.is_read.is_(False),
            )
        )
        return (await self._scalar(stmt)) or 0
