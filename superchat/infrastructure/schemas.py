# superchat/infrastructure/schemas.py
import re
from datetime import datetime
from typing import Annotated, Any, Generic, TypeVar
from uuid import UUID

from pydantic import (
    AfterValidator,
    AliasChoices,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
)

from superchat.domain.entities import MessageType

T = TypeVar("T")

_PHONE_SEPARATORS = re.compile(r"[\s\-().]")
_PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{6,13}$")


def normalize_phone_number(value: str) -> str:
    """Strip separators and return the number as "+<digits>" (at most 15 chars)."""
    raw = _PHONE_SEPARATORS.sub("", value or "")
    if not _PHONE_PATTERN.match(raw):
        raise ValueError("Invalid phone number")
    return raw if raw.startswith("+") else f"+{raw}"


PhoneNumber = Annotated[str, AfterValidator(normalize_phone_number)]


def reject_null(value):
    if value is None:
        raise ValueError("Field may be omitted but not set to null")
    return value


class Envelope(BaseModel):
    error: bool = False
    message: str
    data: Any | None = None


class Page(BaseModel, Generic[T]):
    items: list[T]
    total_count: int
    page: int
    limit: int

    def as_data(self) -> dict:
        return {
            "items": self.items,
            "totalCount": self.total_count,
            "page": self.page,
            "limit": self.limit,
        }


# Users


class UserBasic(BaseModel):
    id: UUID
    name: str | None = None
    phone_number: str
    photo: str | None = None

    model_config = ConfigDict(from_attributes=True)


class User(UserBasic):
    email: str | None = None
    status: str | None = None
    verified: bool
    disabled: bool
    role: str
    created_at: datetime
    updated_at: datetime


class UserUpdate(BaseModel):
    name: str | None = Field(None, max_length=100)
    email: EmailStr | None = None
    photo: str | None = Field(None, max_length=255)
    status: str | None = Field(None, max_length=255)

    model_config = ConfigDict(extra="forbid")


class VerificationUpdate(BaseModel):
    verified: bool


class DisabledUpdate(BaseModel):
    disabled: bool


class ReportCreate(BaseModel):
    reason: str | None = None


class BlockedUser(BaseModel):
    blocked_user_id: UUID
    name: str | None = None
    phone_number: str
    photo: str | None = None
    blocked_at: datetime


# Notification tokens


class NotificationTokenCreate(BaseModel):
    token: str = Field(..., min_length=1)
    device_id: str | None = Field(None, max_length=100)


class NotificationToken(BaseModel):
    id: UUID
    user_id: UUID
    token: str
    device_id: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# Groups


class GroupMember(BaseModel):
    user_id: UUID
    is_admin: bool
    added_by: UUID | None = None
    joined_at: datetime

    model_config = ConfigDict(from_attributes=True)


class GroupCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    photo: str | None = Field(None, max_length=255)
    only_admins_can_post: bool = False
    member_ids: list[UUID] = Field(default_factory=list)


class GroupUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    photo: str | None = Field(None, max_length=255)
    only_admins_can_post: bool | None = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("name", "only_admins_can_post")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class Group(BaseModel):
    id: UUID
    name: str
    created_by: UUID
    photo: str | None = None
    only_admins_can_post: bool
    disabled: bool
    created_at: datetime
    updated_at: datetime
    members: list[GroupMember] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class MemberAdd(BaseModel):
    user_id: UUID


class MemberAdminUpdate(BaseModel):
    is_admin: bool


class ReportedUser(BaseModel):
    id: UUID
    reporter_id: UUID
    reported_id: UUID
    reason: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReportedGroup(BaseModel):
    id: UUID
    reporter_id: UUID
    group_id: UUID
    reason: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# Messages


class MessageCreate(BaseModel):
    # target exclusivity is enforced by the interactor, not here
    to_id: UUID | None = None
    group_id: UUID | None = None
    content: str | None = None
    metadata: dict[str, Any] | None = None
    type: MessageType = MessageType.TEXT


class Message(BaseModel):
    id: UUID
    from_id: UUID
    to_id: UUID | None = None
    group_id: UUID | None = None
    content: str | None = None
    metadata: dict[str, Any] | None = Field(
        None, validation_alias=AliasChoices("meta", "metadata")
    )
    type: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SentMessage(BaseModel):
    message: Message
    recipient_count: int


class InboxItem(BaseModel):
    message: Message
    is_read: bool

    model_config = ConfigDict(from_attributes=True)


# Auth


class SignupRequest(BaseModel):
    phone_number: PhoneNumber


class LoginRequest(BaseModel):
    phone_number: PhoneNumber


class VerifyOtpRequest(BaseModel):
    phone_number: PhoneNumber
    otp_code: str = Field(..., pattern=r"^\d{6}$")
    name: str | None = Field(None, max_length=100)
    email: EmailStr | None = None


class OtpIssued(BaseModel):
    phone_number: str
    expires_at: datetime
    otp_code: str | None = None


class SessionToken(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: User


class AdminLoginRequest(BaseModel):
    username: str
    password: str


class AdminToken(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_at: datetime
    admin_id: UUID


# App settings


class AppSettings(BaseModel):
    allow_creating_broadcast: bool
    allow_creating_groups: bool
    allow_creating_status: bool
    allow_calls: bool
    allow_send_attachment: bool
    allow_user_signup: bool
    maintenance_mode: bool
    otp_expiry_minutes: int
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AppSettingsUpdate(BaseModel):
    allow_creating_broadcast: bool | None = None
    allow_creating_groups: bool | None = None
    allow_creating_status: bool | None = None
    allow_calls: bool | None = None
    allow_send_attachment: bool | None = None
    allow_user_signup: bool | None = None
    maintenance_mode: bool | None = None
    otp_expiry_minutes: int | None = Field(None, ge=1, le=60)

    model_config = ConfigDict(extra="forbid")

    # every column here is NOT NULL; omitted fields are never validated
    @field_validator("*")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


# SMS


class SmsSend(BaseModel):
    phone_number: PhoneNumber
    message: str = Field(..., min_length=1, max_length=1600)


class SmsLog(BaseModel):
    id: UUID
    phone_number: str
    message: str
    request_id: str | None = None
    status: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
