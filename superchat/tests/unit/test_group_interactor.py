import uuid
from datetime import UTC, datetime
from unittest.mock import Mock

import pytest

from superchat.domain import errors
from superchat.domain.entities import Principal, PrincipalKind
from superchat.gateways.interfaces import (
    IGroupGateway,
    IModerationGateway,
    ISettingsGateway,
    IUserGateway,
)
from superchat.infrastructure import models, schemas
from superchat.infrastructure.uow import UnitOfWork, UoWModel
from superchat.interactors.group_interactor import GroupInteractor

CREATOR = uuid.uuid4()
MEMBER = uuid.uuid4()
OUTSIDER = uuid.uuid4()
GROUP = uuid.uuid4()


def user(user_id) -> Principal:
    return Principal(id=user_id, kind=PrincipalKind.USER, token="t")


ADMIN = Principal(id=uuid.uuid4(), kind=PrincipalKind.ADMIN, token="a")


def wrap(model) -> UoWModel:
    return UoWModel(model, UnitOfWork())


def make_group() -> UoWModel:
    now = datetime.now(UTC)
    return wrap(
        models.Group(
            id=GROUP,
            name="Weekend Hikers",
            created_by=CREATOR,
            photo=None,
            only_admins_can_post=False,
            disabled=False,
            created_at=now,
            updated_at=now,
        )
    )


def make_member(user_id, is_admin=False, added_by=None) -> UoWModel:
    return wrap(
        models.GroupMember(
            group_id=GROUP,
            user_id=user_id,
            is_admin=is_admin,
            added_by=added_by,
            joined_at=datetime.now(UTC),
        )
    )


@pytest.fixture
def gateways():
    settings = wrap(models.AppSettings(allow_creating_groups=True))
    group_gateway = Mock(spec=IGroupGateway)
    group_gateway.get_group.return_value = make_group()
    settings_gateway = Mock(spec=ISettingsGateway)
    settings_gateway.get_settings.return_value = settings
    return {
        "group": group_gateway,
        "user": Mock(spec=IUserGateway),
        "moderation": Mock(spec=IModerationGateway),
        "settings": settings_gateway,
    }


@pytest.fixture
def group_interactor(gateways):
    return GroupInteractor(
        gateways["group"], gateways["user"], gateways["moderation"], gateways["settings"]
    )


def members_by_id(**by_id):
    def lookup(group_id, user_id):
        return by_id.get(str(user_id))

    return lookup


class TestCreateGroup:
    async def test_disabled_by_settings(self, group_interactor, gateways):
        gateways["settings"].get_settings.return_value = wrap(
            models.AppSettings(allow_creating_groups=False)
        )

        with pytest.raises(errors.ForbiddenError):
            await group_interactor.create_group(CREATOR, schemas.GroupCreate(name="G"))
        gateways["group"].create_group.assert_not_called()

    async def test_unknown_member(self, group_interactor, gateways):
        gateways["user"].get_existing_ids.return_value = set()

        with pytest.raises(errors.NotFoundError):
            await group_interactor.create_group(
                CREATOR, schemas.GroupCreate(name="G", member_ids=[MEMBER])
            )

    async def test_creator_is_not_checked_as_member(self, group_interactor, gateways):
        gateways["user"].get_existing_ids.return_value = {MEMBER}
        gateways["group"].create_group.return_value = make_group()

        await group_interactor.create_group(
            CREATOR, schemas.GroupCreate(name="G", member_ids=[CREATOR, MEMBER, MEMBER])
        )

        gateways["user"].get_existing_ids.assert_called_once_with([MEMBER])


class TestGroupAccess:
    async def test_missing_group(self, group_interactor, gateways):
        gateways["group"].get_group.return_value = None

        with pytest.raises(errors.NotFoundError):
            await group_interactor.get_group(GROUP, user(CREATOR))

    async def test_outsider_cannot_read(self, group_interactor, gateways):
        gateways["group"].get_member.return_value = None

        with pytest.raises(errors.ForbiddenError):
            await group_interactor.get_group(GROUP, user(OUTSIDER))

    async def test_app_admin_can_read(self, group_interactor, gateways):
        group = await group_interactor.get_group(GROUP, ADMIN)

        assert group.id == GROUP
        gateways["group"].get_member.assert_not_called()

    async def test_plain_member_cannot_update(self, group_interactor, gateways):
        gateways["group"].get_member.return_value = make_member(MEMBER)

        with pytest.raises(errors.ForbiddenError):
            await group_interactor.update_group(
                GROUP, user(MEMBER), schemas.GroupUpdate(name="New")
            )

    async def test_only_creator_deletes(self, group_interactor, gateways):
        with pytest.raises(errors.ForbiddenError):
            await group_interactor.delete_group(GROUP, user(MEMBER))

        await group_interactor.delete_group(GROUP, user(CREATOR))
        await group_interactor.delete_group(GROUP, ADMIN)
        assert gateways["group"].delete_group.call_count == 2


class TestMembership:
    async def test_add_requires_group_admin(self, group_interactor, gateways):
        gateways["group"].get_member.return_value = make_member(MEMBER)

        with pytest.raises(errors.ForbiddenError):
            await group_interactor.add_member(GROUP, OUTSIDER, user(MEMBER))
        gateways["group"].add_member.assert_not_called()

    async def test_add_existing_member_conflicts(self, group_interactor, gateways):
        gateways["group"].get_member.side_effect = members_by_id(
            **{str(CREATOR): make_member(CREATOR, True), str(MEMBER): make_member(MEMBER)}
        )
        gateways["user"].get_user.return_value = wrap(models.User(id=MEMBER))

        with pytest.raises(errors.ConflictError):
            await group_interactor.add_member(GROUP, MEMBER, user(CREATOR))

    async def test_add_unknown_user(self, group_interactor, gateways):
        gateways["group"].get_member.return_value = make_member(CREATOR, True)
        gateways["user"].get_user.return_value = None

        with pytest.raises(errors.NotFoundError):
            await group_interactor.add_member(GROUP, OUTSIDER, user(CREATOR))

    async def test_app_admin_adds_without_adder(self, group_interactor, gateways):
        gateways["group"].get_member.return_value = None
        gateways["user"].get_user.return_value = wrap(models.User(id=OUTSIDER))
        gateways["group"].add_member.return_value = make_member(OUTSIDER)

        member = await group_interactor.add_member(GROUP, OUTSIDER, ADMIN)

        assert member.user_id == OUTSIDER
        gateways["group"].add_member.assert_called_once_with(GROUP, OUTSIDER, None)

    async def test_member_can_leave(self, group_interactor, gateways):
        gateways["group"].remove_member.return_value = True

        assert await group_interactor.remove_member(GROUP, MEMBER, user(MEMBER)) is True
        gateways["group"].get_member.assert_not_called()

    async def test_member_cannot_remove_others(self, group_interactor, gateways):
        gateways["group"].get_member.return_value = make_member(MEMBER)

        with pytest.raises(errors.ForbiddenError):
            await group_interactor.remove_member(GROUP, CREATOR, user(MEMBER))

    async def test_removing_non_member_is_not_an_error(self, group_interactor, gateways):
        gateways["group"].get_member.return_value = make_member(CREATOR, True)
        gateways["group"].remove_member.return_value = False

        assert await group_interactor.remove_member(GROUP, OUTSIDER, user(CREATOR)) is False

    async def test_set_admin_for_non_member(self, group_interactor, gateways):
        gateways["group"].get_member.return_value = make_member(CREATOR, True)
        gateways["group"].set_admin.return_value = None

        with pytest.raises(errors.NotFoundError):
            await group_interactor.set_admin(GROUP, OUTSIDER, True, user(CREATOR))


class TestGroupModeration:
    async def test_report_requires_reason(self, group_interactor, gateways):
        with pytest.raises(errors.InvalidArgumentError):
            await group_interactor.report_group(MEMBER, GROUP, "")
        gateways["moderation"].report_group.assert_not_called()

    async def test_report_missing_group(self, group_interactor, gateways):
        gateways["group"].get_group.return_value = None

        with pytest.raises(errors.NotFoundError):
            await group_interactor.report_group(MEMBER, GROUP, "spam")

    async def test_disable_missing_group(self, group_interactor, gateways):
        gateways["group"].set_disabled.return_value = None

        with pytest.raises(errors.NotFoundError):
            await group_interactor.set_group_disabled(GROUP, True)
