# superchat/tests/conftest.py

import random

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from superchat.config import AppConfig
from superchat.gateways.admin_gateway import AdminGateway
from superchat.gateways.group_gateway import GroupGateway
from superchat.gateways.session_gateway import SessionGateway
from superchat.gateways.user_gateway import UserGateway
from superchat.infrastructure import schemas
from superchat.infrastructure.database import Base, create_database, enable_sqlite_foreign_keys
from superchat.infrastructure.security import SecurityService
from superchat.infrastructure.uow import UnitOfWork
from superchat.main import Application

ADMIN_PASSWORD = "adminpassword"


def random_phone() -> str:
    return f"+1555{random.randint(1000000, 9999999)}"


@pytest.fixture(scope="function")
def app_config():
    """Test configuration with an in-memory SQLite database and OTP echo enabled."""
    return AppConfig(
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        SECRET_KEY="test_secret_key",
        PROJECT_NAME="Test Super Chat API",
        PROJECT_VERSION="1.0.0",
        PROJECT_DESCRIPTION="Test Super Chat API",
        API_PREFIX="/api",
        ENVIRONMENT="dev",
        ALGORITHM="HS256",
        DB_TIMEOUT_SECONDS=5.0,
        SMS_PROVIDER="console",
    )


@pytest.fixture(scope="function")
def security_service(app_config):
    return SecurityService(app_config)


@pytest.fixture(scope="function")
async def engine(app_config):
    """Create a SQLAlchemy engine for testing with shared in-memory SQLite."""
    engine = create_async_engine(
        app_config.DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,  # Reuse the same connection
        echo=False,
    )
    # must be registered before the pooled connection is opened
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        from superchat.infrastructure import models  # noqa: F401

        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture(scope="function")
async def db_session(engine):
    """Provide a SQLAlchemy session for test setup and assertions."""
    async_session_factory = async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False
    )
    session = async_session_factory()
    yield session
    await session.close()


@pytest.fixture(scope="function")
async def uow():
    """Provide a UnitOfWork instance for testing."""
    return UnitOfWork()


@pytest.fixture(scope="function")
async def app(app_config, engine):
    """Create the FastAPI app on top of the test engine."""
    application = Application(config=app_config)
    application.database = create_database(engine)
    return application.create_app()


@pytest.fixture(scope="function")
async def client(app):
    """Provide an HTTP client with the test app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def _create_user(db_session, uow, name: str) -> schemas.User:
    user_gateway = UserGateway(db_session, uow)
    user = await user_gateway.create_user(random_phone(), name)
    await db_session.commit()
    return schemas.User.model_validate(user._model)


@pytest.fixture(scope="function")
async def test_user(db_session, uow):
    """Create a test user in the database."""
    return await _create_user(db_session, uow, "Oswaldo")


@pytest.fixture(scope="function")
async def test_user2(db_session, uow):
    """Create a second test user in the database."""
    return await _create_user(db_session, uow, "Maria")


@pytest.fixture(scope="function")
async def test_user3(db_session, uow):
    return await _create_user(db_session, uow, "Kenji")


async def _session_header(db_session, uow, security_service, user_id) -> dict:
    token, expires_at = security_service.create_user_token(str(user_id))
    await SessionGateway(db_session, uow).create_session(user_id, token, expires_at)
    await db_session.commit()
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
async def auth_header(db_session, uow, security_service, test_user):
    """Authorization header backed by a stored session for test_user."""
    return await _session_header(db_session, uow, security_service, test_user.id)


@pytest.fixture(scope="function")
async def auth_header2(db_session, uow, security_service, test_user2):
    return await _session_header(db_session, uow, security_service, test_user2.id)


@pytest.fixture(scope="function")
async def auth_header3(db_session, uow, security_service, test_user3):
    return await _session_header(db_session, uow, security_service, test_user3.id)


@pytest.fixture(scope="function")
async def test_admin(db_session, uow, security_service):
    """Create an app admin with a known password."""
    admin_gateway = AdminGateway(db_session, uow)
    admin = await admin_gateway.create_admin(
        "root", "root@example.com", security_service.get_password_hash(ADMIN_PASSWORD)
    )
    await db_session.commit()
    return admin


@pytest.fixture(scope="function")
async def admin_header(test_admin, security_service):
    token, _ = security_service.create_admin_token(str(test_admin.id))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
async def test_group(db_session, uow, test_user, test_user2):
    """Group created by test_user with test_user2 as a plain member."""
    group_gateway = GroupGateway(db_session, uow)
    group = await group_gateway.create_group(
        schemas.GroupCreate(name="Weekend Hikers", member_ids=[test_user2.id]),
        test_user.id,
    )
    await db_session.commit()
    return schemas.Group.model_validate(group._model)
