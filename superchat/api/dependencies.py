# superchat/api/dependencies.py
from typing import AsyncGenerator

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from superchat.config import AppConfig
from superchat.domain import errors
from superchat.domain.entities import Principal
from superchat.gateways.admin_gateway import AdminGateway
from superchat.gateways.group_gateway import GroupGateway
from superchat.gateways.message_gateway import MessageGateway
from superchat.gateways.moderation_gateway import ModerationGateway
from superchat.gateways.notification_gateway import NotificationTokenGateway
from superchat.gateways.otp_gateway import OtpGateway
from superchat.gateways.session_gateway import SessionGateway
from superchat.gateways.settings_gateway import SettingsGateway
from superchat.gateways.sms_gateway import SmsLogGateway
from superchat.gateways.user_gateway import UserGateway
from superchat.infrastructure.security import SecurityService
from superchat.infrastructure.sms import SmsSender
from superchat.infrastructure.uow import UnitOfWork
from superchat.interactors.auth_interactor import AuthInteractor
from superchat.interactors.group_interactor import GroupInteractor
from superchat.interactors.message_interactor import MessageInteractor
from superchat.interactors.notification_interactor import NotificationInteractor
from superchat.interactors.settings_interactor import SettingsInteractor
from superchat.interactors.sms_interactor import SmsInteractor
from superchat.interactors.user_interactor import UserInteractor

bearer_scheme = HTTPBearer(auto_error=False)


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_security_service(request: Request) -> SecurityService:
    return request.app.state.security_service


def get_sms_sender(request: Request) -> SmsSender:
    return request.app.state.sms_sender


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    async with request.app.state.database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_uow(config: AppConfig = Depends(get_config)) -> UnitOfWork:
    return UnitOfWork(timeout=config.DB_TIMEOUT_SECONDS)


class Pagination:
    def __init__(
        self,
        request: Request,
        page: int = Query(1, ge=1),
        limit: int | None = Query(None, ge=1),
    ):
        config: AppConfig = request.app.state.config
        self.page = page
        self.limit = min(limit or config.DEFAULT_PAGE_LIMIT, config.MAX_PAGE_LIMIT)


# Gateways


async def get_user_gateway(
    session: AsyncSession = Depends(get_session), uow: UnitOfWork = Depends(get_uow)
):
    return UserGateway(session, uow)


async def get_moderation_gateway(
    session: AsyncSession = Depends(get_session), uow: UnitOfWork = Depends(get_uow)
):
    return ModerationGateway(session, uow)


async def get_group_gateway(
    session: AsyncSession = Depends(get_session), uow: UnitOfWork = Depends(get_uow)
):
    return GroupGateway(session, uow)


async def get_message_gateway(
    session: AsyncSession = Depends(get_session), uow: UnitOfWork = Depends(get_uow)
):
    return MessageGateway(session, uow)


async def get_session_gateway(
    session: AsyncSession = Depends(get_session), uow: UnitOfWork = Depends(get_uow)
):
    return SessionGateway(session, uow)


async def get_otp_gateway(
    session: AsyncSession = Depends(get_session), uow: UnitOfWork = Depends(get_uow)
):
    return OtpGateway(session, uow)


async def get_notification_gateway(
    session: AsyncSession = Depends(get_session), uow: UnitOfWork = Depends(get_uow)
):
    return NotificationTokenGateway(session, uow)


async def get_settings_gateway(
    session: AsyncSession = Depends(get_session), uow: UnitOfWork = Depends(get_uow)
):
    return SettingsGateway(session, uow)


async def get_sms_gateway(
    session: AsyncSession = Depends(get_session), uow: UnitOfWork = Depends(get_uow)
):
    return SmsLogGateway(session, uow)


async def get_admin_gateway(
    session: AsyncSession = Depends(get_session), uow: UnitOfWork = Depends(get_uow)
):
    return AdminGateway(session, uow)


# Interactors


async def get_user_interactor(
    user_gateway: UserGateway = Depends(get_user_gateway),
    moderation_gateway: ModerationGateway = Depends(get_moderation_gateway),
    session_gateway: SessionGateway = Depends(get_session_gateway),
):
    return UserInteractor(user_gateway, moderation_gateway, session_gateway)


async def get_notification_interactor(
    notification_gateway: NotificationTokenGateway = Depends(get_notification_gateway),
):
    return NotificationInteractor(notification_gateway)


async def get_message_interactor(
    message_gateway: MessageGateway = Depends(get_message_gateway),
    user_gateway: UserGateway = Depends(get_user_gateway),
    group_gateway: GroupGateway = Depends(get_group_gateway),
    moderation_gateway: ModerationGateway = Depends(get_moderation_gateway),
    settings_gateway: SettingsGateway = Depends(get_settings_gateway),
):
    return MessageInteractor(
        message_gateway, user_gateway, group_gateway, moderation_gateway, settings_gateway
    )


async def get_group_interactor(
    group_gateway: GroupGateway = Depends(get_group_gateway),
    user_gateway: UserGateway = Depends(get_user_gateway),
    moderation_gateway: ModerationGateway = Depends(get_moderation_gateway),
    settings_gateway: SettingsGateway = Depends(get_settings_gateway),
):
    return GroupInteractor(group_gateway, user_gateway, moderation_gateway, settings_gateway)


async def get_settings_interactor(
    settings_gateway: SettingsGateway = Depends(get_settings_gateway),
):
    return SettingsInteractor(settings_gateway)


async def get_sms_interactor(
    sms_gateway: SmsLogGateway = Depends(get_sms_gateway),
    sms_sender: SmsSender = Depends(get_sms_sender),
):
    return SmsInteractor(sms_gateway, sms_sender)


async def get_auth_interactor(
    config: AppConfig = Depends(get_config),
    security_service: SecurityService = Depends(get_security_service),
    user_gateway: UserGateway = Depends(get_user_gateway),
    otp_gateway: OtpGateway = Depends(get_otp_gateway),
    session_gateway: SessionGateway = Depends(get_session_gateway),
    settings_gateway: SettingsGateway = Depends(get_settings_gateway),
    admin_gateway: AdminGateway = Depends(get_admin_gateway),
    sms_interactor: SmsInteractor = Depends(get_sms_interactor),
):
    return AuthInteractor(
        config,
        security_service,
        user_gateway,
        otp_gateway,
        session_gateway,
        settings_gateway,
        admin_gateway,
        sms_interactor,
    )


# Principals


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth_interactor: AuthInteractor = Depends(get_auth_interactor),
) -> Principal:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise errors.UnauthorizedError("Not authenticated")
    return await auth_interactor.authenticate(credentials.credentials)


async def get_current_user(
    principal: Principal = Depends(get_current_principal),
) -> Principal:
    if not principal.is_user:
        raise errors.ForbiddenError("This action requires a user account")
    return principal


async def require_admin(
    principal: Principal = Depends(get_current_principal),
) -> Principal:
    if not principal.is_admin:
        raise errors.ForbiddenError("Admin privileges required")
    return principal
