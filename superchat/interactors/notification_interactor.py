# superchat/interactors/notification_interactor.py
from uuid import UUID

from superchat.domain import errors
from superchat.gateways.interfaces import INotificationTokenGateway
from superchat.infrastructure import schemas


class NotificationInteractor:
    def __init__(self, notification_gateway: INotificationTokenGateway):
        self.notification_gateway = notification_gateway

    async def register_token(
        self, user_id: UUID, token: schemas.NotificationTokenCreate
    ) -> schemas.NotificationToken:
        saved = await self.notification_gateway.upsert(
            user_id, token.token, token.device_id
        )
        return schemas.NotificationToken.model_validate(saved._model)

    async def list_tokens(self, user_id: UUID) -> list[schemas.NotificationToken]:
        tokens = await self.notification_gateway.list_for_user(user_id)
        return [schemas.NotificationToken.model_validate(t._model) for t in tokens]

    async def unregister_token(self, user_id: UUID, token: str) -> None:
        # only the current owner may drop a token
        if not await self.notification_gateway.delete(user_id, token):
            raise errors.NotFoundError("Notification token not found")
