# superchat/interactors/group_interactor.py
from uuid import UUID

from superchat.domain import errors
from superchat.domain.entities import Principal
from superchat.gateways.interfaces import (
    IGroupGateway,
    IModerationGateway,
    ISettingsGateway,
    IUserGateway,
)
from superchat.infrastructure import schemas
from superchat.infrastructure.uow import UoWModel


class GroupInteractor:
    """Group lifecycle and membership.

    App admins may manage any group. Inside a group, admin rights come from the
    membership row; the creator is simply the first admin member.
    """

    def __init__(
        self,
        group_gateway: IGroupGateway,
        user_gateway: IUserGateway,
        moderation_gateway: IModerationGateway,
        settings_gateway: ISettingsGateway,
    ):
        self.group_gateway = group_gateway
        self.user_gateway = user_gateway
        self.moderation_gateway = moderation_gateway
        self.settings_gateway = settings_gateway

    async def _require_group(self, group_id: UUID) -> UoWModel:
        group = await self.group_gateway.get_group(group_id)
        if not group:
            raise errors.NotFoundError("Group not found")
        return group

    async def _require_group_admin(self, group_id: UUID, principal: Principal) -> None:
        if principal.is_admin:
            return
        member = await self.group_gateway.get_member(group_id, principal.id)
        if not member or not member.is_admin:
            raise errors.ForbiddenError("Only group admins can perform this action")

    async def create_group(
        self, creator_id: UUID, group: schemas.GroupCreate
    ) -> schemas.Group:
        settings = await self.settings_gateway.get_settings()
        if not settings.allow_creating_groups:
            raise errors.ForbiddenError("Creating groups is disabled")

        member_ids = [m for m in dict.fromkeys(group.member_ids) if m != creator_id]
        existing = await self.user_gateway.get_existing_ids(member_ids)
        missing = [str(m) for m in member_ids if m not in existing]
        if missing:
            raise errors.NotFoundError(f"Users not found: {', '.join(missing)}")

        new_group = await self.group_gateway.create_group(group, creator_id)
        return schemas.Group.model_validate(new_group._model)

    async def get_group(self, group_id: UUID, principal: Principal) -> schemas.Group:
        group = await self._require_group(group_id)
        if not principal.is_admin:
            member = await self.group_gateway.get_member(group_id, principal.id)
            if not member:
                raise errors.ForbiddenError("You are not a member of this group")
        return schemas.Group.model_validate(group._model)

    async def update_group(
        self, group_id: UUID, principal: Principal, group_update: schemas.GroupUpdate
    ) -> schemas.Group:
        group = await self._require_group(group_id)
        await self._require_group_admin(group_id, principal)
        updated = await self.group_gateway.update_group(group, group_update)
        return schemas.Group.model_validate(updated._model)

    async def delete_group(self, group_id: UUID, principal: Principal) -> None:
        group = await self._require_group(group_id)
        if not principal.is_admin and group.created_by != principal.id:
            raise errors.ForbiddenError("Only the group creator can delete the group")
        await self.group_gateway.delete_group(group_id)

    async def add_member(
        self, group_id: UUID, user_id: UUID, principal: Principal
    ) -> schemas.GroupMember:
        await self._require_group(group_id)
        await self._require_group_admin(group_id, principal)
        if not await self.user_gateway.get_user(user_id):
            raise errors.NotFoundError("User not found")
        if await self.group_gateway.get_member(group_id, user_id):
            raise errors.ConflictError("User is already a member of this group")
        added_by = None if principal.is_admin else principal.id
        member = await self.group_gateway.add_member(group_id, user_id, added_by)
        return schemas.GroupMember.model_validate(member._model)

    async def remove_member(
        self, group_id: UUID, user_id: UUID, principal: Principal
    ) -> bool:
        await self._require_group(group_id)
        leaving_self = principal.is_user and principal.id == user_id
        if not leaving_self:
            await self._require_group_admin(group_id, principal)
        return await self.group_gateway.remove_member(group_id, user_id)

    async def set_admin(
        self, group_id: UUID, user_id: UUID, is_admin: bool, principal: Principal
    ) -> schemas.GroupMember:
        await self._require_group(group_id)
        await self._require_group_admin(group_id, principal)
        member = await self.group_gateway.set_admin(group_id, user_id, is_admin)
        if not member:
            raise errors.NotFoundError("User is not a member of this group")
        return schemas.GroupMember.model_validate(member._model)

    async def report_group(
        self, reporter_id: UUID, group_id: UUID, reason: str | None
    ) -> schemas.ReportedGroup:
        if not reason or not reason.strip():
            raise errors.InvalidArgumentError("A reason is required")
        await self._require_group(group_id)
        report = await self.moderation_gateway.report_group(
            reporter_id, group_id, reason.strip()
        )
        return schemas.ReportedGroup.model_validate(report._model)

    async def set_group_disabled(self, group_id: UUID, disabled: bool) -> schemas.Group:
        group = await self.group_gateway.set_disabled(group_id, disabled)
        if not group:
            raise errors.NotFoundError("Group not found")
        return schemas.Group.model_validate(group._model)

    async def list_group_reports(
        self, page: int = 1, limit: int = 20
    ) -> schemas.Page[schemas.ReportedGroup]:
        reports, total = await self.moderation_gateway.list_group_reports(page, limit)
        return schemas.Page[schemas.ReportedGroup](
            items=[schemas.ReportedGroup.model_validate(r._model) for r in reports],
            total_count=total,
            page=page,
            limit=limit,
        )
