# superchat/gateways/moderation_gateway.py
from uuid import UUID

from sqlalchemy import and_, delete, exists, or_, select

from superchat.gateways.base import BaseGateway
from superchat.gateways.interfaces import IModerationGateway
from superchat.infrastructure import models
from superchat.infrastructure.uow import UoWModel


class ModerationGateway(BaseGateway, IModerationGateway):
    """Blocks between users and the user/group report trail."""

    models = (models.ReportedUser, models.ReportedGroup)

    async def block(self, blocker_id: UUID, blocked_id: UUID) -> bool:
        stmt = (
            self._insert(models.BlockedUser)
            .values(blocker_id=blocker_id, blocked_id=blocked_id)
            .on_conflict_do_nothing(index_elements=["blocker_id", "blocked_id"])
        )
        result = await self._execute(stmt)
        return result.rowcount > 0

    async def unblock(self, blocker_id: UUID, blocked_id: UUID) -> bool:
        stmt = delete(models.BlockedUser).where(
            models.BlockedUser.blocker_id == blocker_id,
            models.BlockedUser.blocked_id == blocked_id,
        )
        result = await self._execute(stmt)
        return result.rowcount > 0

    async def is_blocked_between(self, user_a: UUID, user_b: UUID) -> bool:
        stmt = select(
            exists().where(
                or_(
                    and_(
                        models.BlockedUser.blocker_id == user_a,
                        models.BlockedUser.blocked_id == user_b,
                    ),
                    and_(
                        models.BlockedUser.blocker_id == user_b,
                        models.BlockedUser.blocked_id == user_a,
                    ),
                )
            )
        )
        return bool(await self._scalar(stmt))

    async def list_blocked(self, blocker_id: UUID) -> list[dict]:
        stmt = (
            select(
                models.BlockedUser.blocked_id.label("blocked_user_id"),
                models.User.name,
                models.User.phone_number,
                models.User.photo,
                models.BlockedUser.created_at.label("blocked_at"),
            )
            .join(models.User, models.BlockedUser.blocked_id == models.User.id)
            .where(models.BlockedUser.blocker_id == blocker_id)
            .order_by(models.BlockedUser.created_at.desc())
        )
        result = await self._execute(stmt)
        return [dict(row) for row in result.mappings().all()]

    async def report_user(
        self, reporter_id: UUID, reported_id: UUID, reason: str
    ) -> UoWModel:
        report = models.ReportedUser(
            reporter_id=reporter_id, reported_id=reported_id, reason=reason
        )
        uow_report = self.uow.register_new(report)
        await self.uow.commit()
        return uow_report

    async def report_group(
        self, reporter_id: UUID, group_id: UUID, reason: str
    ) -> UoWModel:
        report = models.ReportedGroup(
            reporter_id=reporter_id, group_id=group_id, reason=reason
        )
        uow_report = self.uow.register_new(report)
        await self.uow.commit()
        return uow_report

    async def list_user_reports(
        self, page: int = 1, limit: int = 20
    ) -> tuple[list[UoWModel], int]:
        stmt = select(models.ReportedUser).order_by(models.ReportedUser.created_at.desc())
        reports, total = await self._paginate(stmt, page, limit)
        return [UoWModel(report, self.uow) for report in reports], total

    async def list_group_reports(
        self, page: int = 1, limit: int = 20
    ) -> tuple[list[UoWModel], int]:
        stmt = select(models.ReportedGroup).order_by(models.ReportedGroup.created_at.desc())
        reports, total = await self._paginate(stmt, page, limit)
        return [UoWModel(report, self.uow) for report in reports], total
