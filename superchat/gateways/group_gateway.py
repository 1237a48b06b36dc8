# superchat/gateways/group_gateway.py
from uuid import UUID

from sqlalchemy import delete, select, update

from superchat.gateways.base import BaseGateway
from superchat.gateways.interfaces import IGroupGateway
from superchat.infrastructure import models, schemas
from superchat.infrastructure.uow import UoWModel


class GroupGateway(BaseGateway, IGroupGateway):
    models = (models.Group, models.GroupMember)

    async def get_group(self, group_id: UUID) -> UoWModel | None:
        # populate_existing refreshes members changed earlier in the same session
        stmt = (
            select(models.Group)
            .filter(models.Group.id == group_id)
            .execution_options(populate_existing=True)
        )
        result = await self._execute(stmt)
        group = result.scalar_one_or_none()
        return UoWModel(group, self.uow) if group else None

    async def create_group(
        self, group: schemas.GroupCreate, creator_id: UUID
    ) -> UoWModel:
        db_group = models.Group(
            name=group.name,
            photo=group.photo,
            only_admins_can_post=group.only_admins_can_post,
            created_by=creator_id,
        )
        db_group.members.append(
            models.GroupMember(user_id=creator_id, is_admin=True, added_by=creator_id)
        )
        for member_id in dict.fromkeys(group.member_ids):
            if member_id == creator_id:
                continue
            db_group.members.append(
                models.GroupMember(user_id=member_id, is_admin=False, added_by=creator_id)
            )
        self.uow.register_new(db_group)
        await self.uow.commit()
        return await self.get_group(db_group.id)

    async def update_group(
        self, group: UoWModel, group_update: schemas.GroupUpdate
    ) -> UoWModel:
        for key, value in group_update.model_dump(exclude_unset=True).items():
            setattr(group, key, value)
        await self.uow.commit()
        return await self.get_group(group.id)

    async def set_disabled(self, group_id: UUID, disabled: bool) -> UoWModel | None:
        stmt = (
            update(models.Group)
            .where(models.Group.id == group_id)
            .values(disabled=disabled, updated_at=models.utcnow())
        )
        result = await self._execute(stmt)
        if result.rowcount == 0:
            return None
        return await self.get_group(group_id)

    async def delete_group(self, group_id: UUID) -> bool:
        stmt = delete(models.Group).where(models.Group.id == group_id)
        result = await self._execute(stmt)
        return result.rowcount > 0

    async def get_member(self, group_id: UUID, user_id: UUID) -> UoWModel | None:
        stmt = (
            select(models.GroupMember)
            .filter(
                models.GroupMember.group_id == group_id,
                models.GroupMember.user_id == user_id,
            )
            .execution_options(populate_existing=True)
        )
        result = await self._execute(stmt)
        member = result.scalar_one_or_none()
        return UoWModel(member, self.uow) if member else None

    async def add_member(
        self,
        group_id: UUID,
        user_id: UUID,
        added_by: UUID | None,
        is_admin: bool = False,
    ) -> UoWModel:
        member = models.GroupMember(
            group_id=group_id, user_id=user_id, is_admin=is_admin, added_by=added_by
        )
        uow_member = self.uow.register_new(member)
        await self.uow.commit()
        return uow_member

    async def remove_member(self, group_id: UUID, user_id: UUID) -> bool:
        stmt = delete(models.GroupMember).where(
            models.GroupMember.group_id == group_id,
            models.GroupMember.user_id == user_id,
        )
        result = await self._execute(stmt)
        return result.rowcount > 0

    async def set_admin(
        self, group_id: UUID, user_id: UUID, is_admin: bool
    ) -> UoWModel | None:
        stmt = (
            update(models.GroupMember)
            .where(
                models.GroupMember.group_id == group_id,
                models.GroupMember.user_id == user_id,
            )
            .values(is_admin=is_admin)
        )
        result = await self._execute(stmt)
        if result.rowcount == 0:
            return None
        return await self.get_member(group_id, user_id)
