# superchat/gateways/interfaces.py
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from superchat.infrastructure import schemas
from superchat.infrastructure.uow import UoWModel


class IUserGateway(ABC):
    @abstractmethod
    async def get_user(self, user_id: UUID) -> Optional[UoWModel]:
        pass

    @abstractmethod
    async def get_by_phone(self, phone_number: str) -> Optional[UoWModel]:
        pass

    @abstractmethod
    async def get_existing_ids(self, user_ids: List[UUID]) -> set[UUID]:
        pass

    @abstractmethod
    async def get_all(
        self, page: int = 1, limit: int = 20, search: Optional[str] = None
    ) -> tuple[List[UoWModel], int]:
        pass

    @abstractmethod
    async def create_user(
        self, phone_number: str, name: Optional[str] = None, email: Optional[str] = None
    ) -> UoWModel:
        pass

    @abstractmethod
    async def update_user(
        self, user: UoWModel, user_update: schemas.UserUpdate
    ) -> UoWModel:
        pass

    @abstractmethod
    async def set_flags(self, user_id: UUID, **values: bool) -> Optional[UoWModel]:
        pass

    @abstractmethod
    async def delete_user(self, user_id: UUID) -> bool:
        pass


class IModerationGateway(ABC):
    @abstractmethod
    async def block(self, blocker_id: UUID, blocked_id: UUID) -> bool:
        pass

    @abstractmethod
    async def unblock(self, blocker_id: UUID, blocked_id: UUID) -> bool:
        pass

    @abstractmethod
    async def is_blocked_between(self, user_a: UUID, user_b: UUID) -> bool:
        pass

    @abstractmethod
    async def list_blocked(self, blocker_id: UUID) -> List[dict]:
        pass

    @abstractmethod
    async def report_user(
        self, reporter_id: UUID, reported_id: UUID, reason: str
    ) -> UoWModel:
        pass

    @abstractmethod
    async def report_group(
        self, reporter_id: UUID, group_id: UUID, reason: str
    ) -> UoWModel:
        pass

    @abstractmethod
    async def list_user_reports(
        self, page: int = 1, limit: int = 20
    ) -> tuple[List[UoWModel], int]:
        pass

    @abstractmethod
    async def list_group_reports(
        self, page: int = 1, limit: int = 20
    ) -> tuple[List[UoWModel], int]:
        pass


class IGroupGateway(ABC):
    @abstractmethod
    async def get_group(self, group_id: UUID) -> Optional[UoWModel]:
        pass

    @abstractmethod
    async def create_group(
        self, group: schemas.GroupCreate, creator_id: UUID
    ) -> UoWModel:
        pass

    @abstractmethod
    async def update_group(
        self, group: UoWModel, group_update: schemas.GroupUpdate
    ) -> UoWModel:
        pass

    @abstractmethod
    async def set_disabled(self, group_id: UUID, disabled: bool) -> Optional[UoWModel]:
        pass

    @abstractmethod
    async def delete_group(self, group_id: UUID) -> bool:
        pass

    @abstractmethod
    async def get_member(self, group_id: UUID, user_id: UUID) -> Optional[UoWModel]:
        pass

    @abstractmethod
    async def add_member(
        self,
        group_id: UUID,
        user_id: UUID,
        added_by: Optional[UUID],
        is_admin: bool = False,
    ) -> UoWModel:
        pass

    @abstractmethod
    async def remove_member(self, group_id: UUID, user_id: UUID) -> bool:
        pass

    @abstractmethod
    async def set_admin(
        self, group_id: UUID, user_id: UUID, is_admin: bool
    ) -> Optional[UoWModel]:
        pass


class IMessageGateway(ABC):
    @abstractmethod
    async def rollback(self) -> None:
        pass

    @abstractmethod
    async def get_group_recipient_ids(
        self, group_id: UUID, sender_id: UUID
    ) -> List[UUID]:
        pass

    @abstractmethod
    async def create_message(
        self, message: schemas.MessageCreate, sender_id: UUID
    ) -> UoWModel:
        pass

    @abstractmethod
    async def mark_read(self, user_id: UUID, message_id: UUID) -> bool:
        pass

    @abstractmethod
    async def get_inbox(
        self, user_id: UUID, page: int = 1, limit: int = 20
    ) -> tuple[List[UoWModel], int]:
        pass

    @abstractmethod
    async def unread_count(self, user_id: UUID) -> int:
        pass


class ISessionGateway(ABC):
    @abstractmethod
    async def create_session(
        self, user_id: UUID, token: str, expires_at: datetime
    ) -> UoWModel:
        pass

    @abstractmethod
    async def get_active_session(self, token: str) -> Optional[UoWModel]:
        pass

    @abstractmethod
    async def delete_by_token(self, token: str) -> bool:
        pass

    @abstractmethod
    async def delete_for_user(self, user_id: UUID) -> int:
        pass


class IOtpGateway(ABC):
    @abstractmethod
    async def create_otp(
        self,
        phone_number: str,
        otp_code: str,
        expires_at: datetime,
        user_id: Optional[UUID] = None,
    ) -> UoWModel:
        pass

    @abstractmethod
    async def get_valid_otp(self, phone_number: str, otp_code: str) -> Optional[UoWModel]:
        pass

    @abstractmethod
    async def delete_for_phone(self, phone_number: str) -> int:
        pass


class INotificationTokenGateway(ABC):
    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[UoWModel]:
        pass

    @abstractmethod
    async def upsert(
        self, user_id: UUID, token: str, device_id: Optional[str]
    ) -> UoWModel:
        pass

    @abstractmethod
    async def list_for_user(self, user_id: UUID) -> List[UoWModel]:
        pass

    @abstractmethod
    async def delete(self, user_id: UUID, token: str) -> bool:
        pass


class ISettingsGateway(ABC):
    @abstractmethod
    async def get_settings(self) -> UoWModel:
        pass

    @abstractmethod
    async def update_settings(
        self, settings: UoWModel, settings_update: schemas.AppSettingsUpdate
    ) -> UoWModel:
        pass


class ISmsLogGateway(ABC):
    @abstractmethod
    async def create_log(
        self,
        phone_number: str,
        message: str,
        request_id: Optional[str],
        status: Optional[str],
    ) -> UoWModel:
        pass

    @abstractmethod
    async def get_all(
        self, page: int = 1, limit: int = 20, search: Optional[str] = None
    ) -> tuple[List[UoWModel], int]:
        pass


class IAdminGateway(ABC):
    @abstractmethod
    async def get_admin(self, admin_id: UUID) -> Optional[UoWModel]:
        pass

    @abstractmethod
    async def get_by_identifier(self, identifier: str) -> Optional[UoWModel]:
        pass

    @abstractmethod
    async def create_admin(
        self, username: str, email: str, password_hash: str
    ) -> UoWModel:
        pass
