# superchat/interactors/auth_interactor.py
import logging
from datetime import timedelta
from uuid import UUID

from superchat.config import AppConfig
from superchat.domain import errors
from superchat.domain.entities import Principal, PrincipalKind
from superchat.gateways.interfaces import (
    IAdminGateway,
    IOtpGateway,
    ISessionGateway,
    ISettingsGateway,
    IUserGateway,
)
from superchat.infrastructure import models, schemas
from superchat.infrastructure.security import SecurityService
from superchat.interactors.sms_interactor import SmsInteractor

logger = logging.getLogger("SuperChatAPI.auth")


class AuthInteractor:
    """Phone/OTP sign-in for users, password sign-in for admins, and token checks."""

    def __init__(
        self,
        config: AppConfig,
        security_service: SecurityService,
        user_gateway: IUserGateway,
        otp_gateway: IOtpGateway,
        session_gateway: ISessionGateway,
        settings_gateway: ISettingsGateway,
        admin_gateway: IAdminGateway,
        sms_interactor: SmsInteractor,
    ):
        self.config = config
        self.security_service = security_service
        self.user_gateway = user_gateway
        self.otp_gateway = otp_gateway
        self.session_gateway = session_gateway
        self.settings_gateway = settings_gateway
        self.admin_gateway = admin_gateway
        self.sms_interactor = sms_interactor

    async def _issue_otp(
        self, phone_number: str, otp_expiry_minutes: int, user_id: UUID | None = None
    ) -> schemas.OtpIssued:
        code = self.security_service.generate_otp_code()
        expires_at = models.utcnow() + timedelta(minutes=otp_expiry_minutes)
        await self.otp_gateway.create_otp(phone_number, code, expires_at, user_id)
        await self.sms_interactor.send_sms(
            phone_number,
            f"Your {self.config.PROJECT_NAME} verification code is {code}. "
            f"It expires in {otp_expiry_minutes} minutes.",
        )
        return schemas.OtpIssued(
            phone_number=phone_number,
            expires_at=expires_at,
            otp_code=code if self.config.is_dev else None,
        )

    async def request_signup_otp(self, phone_number: str) -> schemas.OtpIssued:
        settings = await self.settings_gateway.get_settings()
        if settings.maintenance_mode:
            raise errors.ForbiddenError("The app is under maintenance")
        if not settings.allow_user_signup:
            raise errors.ForbiddenError("Signups are currently disabled")
        if await self.user_gateway.get_by_phone(phone_number):
            raise errors.ConflictError("Phone number is already registered")
        return await self._issue_otp(phone_number, settings.otp_expiry_minutes)

    async def request_login_otp(self, phone_number: str) -> schemas.OtpIssued:
        settings = await self.settings_gateway.get_settings()
        if settings.maintenance_mode:
            raise errors.ForbiddenError("The app is under maintenance")
        user = await self.user_gateway.get_by_phone(phone_number)
        if not user:
            raise errors.NotFoundError("No account is registered with this phone number")
        if user.disabled:
            raise errors.ForbiddenError("User account is disabled")
        return await self._issue_otp(phone_number, settings.otp_expiry_minutes, user.id)

    async def verify_otp(self, request: schemas.VerifyOtpRequest) -> schemas.SessionToken:
        otp = await self.otp_gateway.get_valid_otp(request.phone_number, request.otp_code)
        if not otp:
            raise errors.InvalidArgumentError("Invalid or expired OTP")
        await self.otp_gateway.delete_for_phone(request.phone_number)

        user = await self.user_gateway.get_by_phone(request.phone_number)
        if not user:
            settings = await self.settings_gateway.get_settings()
            if settings.maintenance_mode or not settings.allow_user_signup:
                raise errors.ForbiddenError("Signups are currently disabled")
            user = await self.user_gateway.create_user(
                request.phone_number, request.name, request.email
            )
            logger.info("Registered user %s", user.id)
        if user.disabled:
            raise errors.ForbiddenError("User account is disabled")

        token, expires_at = self.security_service.create_user_token(str(user.id))
        await self.session_gateway.create_session(user.id, token, expires_at)
        return schemas.SessionToken(
            token=token,
            expires_at=expires_at,
            user=schemas.User.model_validate(user._model),
        )

    async def logout(self, token: str) -> None:
        if not await self.session_gateway.delete_by_token(token):
            raise errors.UnauthorizedError("Session not found")

    async def admin_login(self, identifier: str, password: str) -> schemas.AdminToken:
        admin = await self.admin_gateway.get_by_identifier(identifier)
        if not admin or not self.security_service.verify_password(
            password, admin.password_hash
        ):
            raise errors.UnauthorizedError("Incorrect username or password")
        token, expires_at = self.security_service.create_admin_token(str(admin.id))
        return schemas.AdminToken(token=token, expires_at=expires_at, admin_id=admin.id)

    async def authenticate(self, token: str) -> Principal:
        """Resolve a bearer token to the principal it belongs to."""
        decoded = self.security_service.decode_session_token(token)
        if decoded is None:
            raise errors.UnauthorizedError()
        subject, kind = decoded
        try:
            principal_id = UUID(subject)
        except ValueError:
            raise errors.UnauthorizedError()

        if kind == PrincipalKind.ADMIN:
            if not await self.admin_gateway.get_admin(principal_id):
                raise errors.UnauthorizedError()
            return Principal(id=principal_id, kind=kind, token=token)

        session = await self.session_gateway.get_active_session(token)
        if not session or session.user_id != principal_id:
            raise errors.UnauthorizedError("Invalid or expired token")
        user = await self.user_gateway.get_user(principal_id)
        if not user:
            raise errors.UnauthorizedError("Invalid or expired token")
        if user.disabled:
            raise errors.ForbiddenError("User account is disabled")
        return Principal(id=principal_id, kind=kind, token=token)
