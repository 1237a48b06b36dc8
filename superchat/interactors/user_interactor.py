# superchat/interactors/user_interactor.py
from uuid import UUID

from superchat.domain import errors
from superchat.gateways.interfaces import (
    IModerationGateway,
    ISessionGateway,
    IUserGateway,
)
from superchat.infrastructure import schemas
from superchat.infrastructure.uow import UoWModel


class UserInteractor:
    def __init__(
        self,
        user_gateway: IUserGateway,
        moderation_gateway: IModerationGateway,
        session_gateway: ISessionGateway,
    ):
        self.user_gateway = user_gateway
        self.moderation_gateway = moderation_gateway
        self.session_gateway = session_gateway

    async def _require_user(self, user_id: UUID) -> UoWModel:
        user: UoWModel | None = await self.user_gateway.get_user(user_id)
        if not user:
            raise errors.NotFoundError("User not found")
        return user

    async def get_user(self, user_id: UUID) -> schemas.User:
        user = await self._require_user(user_id)
        return schemas.User.model_validate(user._model)

    async def get_users(
        self, page: int = 1, limit: int = 20, search: str | None = None
    ) -> schemas.Page[schemas.User]:
        users, total = await self.user_gateway.get_all(page, limit, search)
        return schemas.Page[schemas.User](
            items=[schemas.User.model_validate(user._model) for user in users],
            total_count=total,
            page=page,
            limit=limit,
        )

    async def update_user(
        self, user_id: UUID, user_update: schemas.UserUpdate
    ) -> schemas.User:
        user = await self._require_user(user_id)
        updated_user = await self.user_gateway.update_user(user, user_update)
        return schemas.User.model_validate(updated_user._model)

    async def update_verification_status(self, user_id: UUID, verified: bool) -> schemas.User:
        user = await self.user_gateway.set_flags(user_id, verified=verified)
        if not user:
            raise errors.NotFoundError("User not found")
        return schemas.User.model_validate(user._model)

    async def update_disabled_status(self, user_id: UUID, disabled: bool) -> schemas.User:
        user = await self.user_gateway.set_flags(user_id, disabled=disabled)
        if not user:
            raise errors.NotFoundError("User not found")
        if disabled:
            await self.session_gateway.delete_for_user(user_id)
        return schemas.User.model_validate(user._model)

    async def delete_user(self, user_id: UUID) -> None:
        if not await self.user_gateway.delete_user(user_id):
            raise errors.NotFoundError("User not found")

    async def report_user(
        self, reporter_id: UUID, reported_id: UUID, reason: str | None
    ) -> schemas.ReportedUser:
        if reporter_id == reported_id:
            raise errors.InvalidArgumentError("You cannot report yourself")
        if not reason or not reason.strip():
            raise errors.InvalidArgumentError("A reason is required")
        await self._require_user(reported_id)
        report = await self.moderation_gateway.report_user(
            reporter_id, reported_id, reason.strip()
        )
        return schemas.ReportedUser.model_validate(report._model)

    async def block_user(self, blocker_id: UUID, blocked_id: UUID) -> bool:
        """Returns True when a new block row was written, False if it already existed."""
        if blocker_id == blocked_id:
            raise errors.InvalidArgumentError("You cannot block yourself")
        await self._require_user(blocked_id)
        return await self.moderation_gateway.block(blocker_id, blocked_id)

    async def unblock_user(self, blocker_id: UUID, blocked_id: UUID) -> bool:
        await self._require_user(blocked_id)
        return await self.moderation_gateway.unblock(blocker_id, blocked_id)

    async def list_blocked_users(self, blocker_id: UUID) -> list[schemas.BlockedUser]:
        rows = await self.moderation_gateway.list_blocked(blocker_id)
        return [schemas.BlockedUser(**row) for row in rows]

    async def list_user_reports(
        self, page: int = 1, limit: int = 20
    ) -> schemas.Page[schemas.ReportedUser]:
        reports, total = await self.moderation_gateway.list_user_reports(page, limit)
        return schemas.Page[schemas.ReportedUser](
            items=[schemas.ReportedUser.model_validate(r._model) for r in reports],
            total_count=total,
            page=page,
            limit=limit,
        )
