# superchat/tests/unit/test_unit_of_work.py

from unittest.mock import AsyncMock

import pytest

from superchat.domain import errors
from superchat.infrastructure import models
from superchat.infrastructure.data_mappers import SessionMapper
from superchat.infrastructure.uow import UnitOfWork, UoWModel


@pytest.fixture
def mock_session():
    return AsyncMock()


@pytest.fixture
def uow(mock_session):
    """
    Initializes the UnitOfWork with a mocked mapper for users.
    """
    uow = UnitOfWork(timeout=1.0)
    user_mapper = SessionMapper(mock_session, uow.timeout)
    user_mapper.insert = AsyncMock()
    user_mapper.update = AsyncMock()
    uow.mappers[models.User] = user_mapper
    return uow


def make_user(phone="+15550000001"):
    return models.User(phone_number=phone, name="Test User")


async def test_register_new_model(uow):
    user = make_user()
    uow_model = uow.register_new(user)

    assert id(user) in uow.new
    assert isinstance(uow_model, UoWModel)


async def test_modify_new_model_does_not_register_dirty(uow):
    user = make_user()
    uow_model = uow.register_new(user)

    uow_model.name = "Renamed"

    assert len(uow.dirty) == 0
    assert id(user) in uow.new
    assert user.name == "Renamed"


async def test_modify_existing_model_registers_dirty(uow):
    user = make_user()
    uow_model = UoWModel(user, uow)

    uow_model.status = "Busy"

    assert id(user) in uow.dirty


async def test_commit_runs_inserts_and_updates_then_clears(uow):
    new_user = make_user("+15550000001")
    dirty_user = make_user("+15550000002")
    uow.register_new(new_user)
    uow.register_dirty(dirty_user)

    await uow.commit()

    mapper = uow.mappers[models.User]
    mapper.insert.assert_awaited_once_with(new_user)
    mapper.update.assert_awaited_once_with(dirty_user)
    assert not uow.new and not uow.dirty


async def test_commit_failure_still_discards_pending(uow):
    uow.mappers[models.User].insert.side_effect = errors.ConflictError()
    uow.register_new(make_user())

    with pytest.raises(errors.ConflictError):
        await uow.commit()

    assert not uow.new
