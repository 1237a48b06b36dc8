import uuid

import pytest

from superchat.domain import errors
from superchat.gateways.user_gateway import UserGateway
from superchat.infrastructure import schemas


@pytest.fixture
def user_gateway(db_session, uow):
    return UserGateway(db_session, uow)


async def test_search_matches_partial_name_case_insensitively(user_gateway, test_user, test_user2):
    users, total = await user_gateway.get_all(search="oswal")

    assert total == 1
    assert [u.name for u in users] == ["Oswaldo"]


async def test_search_without_match_is_empty(user_gateway, test_user2):
    users, total = await user_gateway.get_all(search="oswal")

    assert users == []
    assert total == 0


async def test_search_matches_phone_number(user_gateway, test_user, test_user2):
    users, total = await user_gateway.get_all(search=test_user2.phone_number[-7:])

    assert total == 1
    assert users[0].id == test_user2.id


async def test_pagination_reports_full_total(user_gateway, test_user, test_user2, test_user3):
    users, total = await user_gateway.get_all(page=2, limit=2)

    assert total == 3
    assert len(users) == 1


async def test_duplicate_phone_conflicts(user_gateway, test_user):
    with pytest.raises(errors.ConflictError):
        await user_gateway.create_user(test_user.phone_number, "Copy")


async def test_update_user_applies_only_supplied_fields(user_gateway, test_user):
    user = await user_gateway.get_user(test_user.id)

    updated = await user_gateway.update_user(user, schemas.UserUpdate(status="Hiking"))

    assert updated.status == "Hiking"
    assert updated.name == "Oswaldo"


async def test_toggle_verified_ends_false(user_gateway, test_user):
    await user_gateway.set_flags(test_user.id, verified=True)
    user = await user_gateway.set_flags(test_user.id, verified=False)

    assert user.verified is False


async def test_set_flags_on_missing_user(user_gateway):
    assert await user_gateway.set_flags(uuid.uuid4(), verified=True) is None


async def test_delete_user_reports_row_count(user_gateway, test_user):
    assert await user_gateway.delete_user(test_user.id) is True
    assert await user_gateway.delete_user(test_user.id) is False
    assert await user_gateway.get_user(test_user.id) is None


async def test_get_existing_ids(user_gateway, test_user):
    missing = uuid.uuid4()

    assert await user_gateway.get_existing_ids([test_user.id, missing]) == {test_user.id}


async def test_search_escapes_like_wildcards(user_gateway, test_user, test_user2):
    for term in ("_", "%"):
        users, total = await user_gateway.get_all(search=term)

        assert users == []
        assert total == 0


async def test_constraint_violation_on_update_is_a_domain_error(user_gateway, uow, test_user):
    user = await user_gateway.get_user(test_user.id)
    user.phone_number = None

    with pytest.raises(errors.ConflictError):
        await uow.commit()
