# superchat/interactors/message_interactor.py
import logging
from uuid import UUID

from superchat.domain import errors
from superchat.domain.entities import MessageType
from superchat.gateways.interfaces import (
    IGroupGateway,
    IMessageGateway,
    IModerationGateway,
    ISettingsGateway,
    IUserGateway,
)
from superchat.infrastructure import schemas

logger = logging.getLogger("SuperChatAPI.messages")


class MessageInteractor:
    def __init__(
        self,
        message_gateway: IMessageGateway,
        user_gateway: IUserGateway,
        group_gateway: IGroupGateway,
        moderation_gateway: IModerationGateway,
        settings_gateway: ISettingsGateway,
    ):
        self.message_gateway = message_gateway
        self.user_gateway = user_gateway
        self.group_gateway = group_gateway
        self.moderation_gateway = moderation_gateway
        self.settings_gateway = settings_gateway

    @staticmethod
    def _validate_shape(message: schemas.MessageCreate) -> None:
        if (message.to_id is None) == (message.group_id is None):
            raise errors.InvalidArgumentError(
                "Exactly one of to_id or group_id must be provided"
            )
        if message.type == MessageType.SYSTEM:
            raise errors.InvalidArgumentError("System messages cannot be sent by clients")
        if not message.content and not message.metadata:
            raise errors.InvalidArgumentError("Message content or metadata is required")

    async def _check_direct(self, sender_id: UUID, recipient_id: UUID) -> None:
        if sender_id == recipient_id:
            raise errors.InvalidArgumentError("You cannot message yourself")
        if not await self.user_gateway.get_user(recipient_id):
            raise errors.NotFoundError("Recipient not found")
        if await self.moderation_gateway.is_blocked_between(sender_id, recipient_id):
            raise errors.ForbiddenError("Messaging between these users is blocked")

    async def _check_group(self, sender_id: UUID, group_id: UUID) -> None:
        group = await self.group_gateway.get_group(group_id)
        if not group:
            raise errors.NotFoundError("Group not found")
        if group.disabled:
            raise errors.ForbiddenError("Group is disabled")
        member = await self.group_gateway.get_member(group_id, sender_id)
        if not member:
            raise errors.ForbiddenError("You are not a member of this group")
        if group.only_admins_can_post and not member.is_admin:
            raise errors.ForbiddenError("Only group admins can post in this group")

    async def send_message(
        self, sender_id: UUID, message: schemas.MessageCreate
    ) -> schemas.SentMessage:
        self._validate_shape(message)

        if message.type.is_attachment:
            settings = await self.settings_gateway.get_settings()
            if not settings.allow_send_attachment:
                raise errors.ForbiddenError("Sending attachments is disabled")

        if message.to_id is not None:
            await self._check_direct(sender_id, message.to_id)
        else:
            await self._check_group(sender_id, message.group_id)

        try:
            created = await self.message_gateway.create_message(message, sender_id)
        except errors.TransientStorageError:
            # one replay on a fresh transaction, then the failure surfaces
            logger.warning("Transient failure sending message from %s, retrying", sender_id)
            await self.message_gateway.rollback()
            created = await self.message_gateway.create_message(message, sender_id)

        return schemas.SentMessage(
            message=schemas.Message.model_validate(created._model),
            recipient_count=len(created.recipients),
        )

    async def mark_read(self, user_id: UUID, message_id: UUID) -> None:
        if not await self.message_gateway.mark_read(user_id, message_id):
            raise errors.NotFoundError("Message not found")

    async def list_inbox(
        self, user_id: UUID, page: int = 1, limit: int = 20
    ) -> schemas.Page[schemas.InboxItem]:
        rows, total = await self.message_gateway.get_inbox(user_id, page, limit)
        return schemas.Page[schemas.InboxItem](
            items=[schemas.InboxItem.model_validate(row._model) for row in rows],
            total_count=total,
            page=page,
            limit=limit,
        )

    async def get_unread_count(self, user_id: UUID) -> int:
        return await self.message_gateway.unread_count(user_id)
