# superchat/domain/entities.py
from dataclasses import dataclass
from enum import IntEnum, StrEnum
from uuid import UUID


class MessageType(IntEnum):
    TEXT = 1
    IMAGE = 2
    VIDEO = 3
    AUDIO = 4
    FILE = 5
    SYSTEM = 6

    @property
    def is_attachment(self) -> bool:
        return self in (
            MessageType.IMAGE,
            MessageType.VIDEO,
            MessageType.AUDIO,
            MessageType.FILE,
        )


class PrincipalKind(StrEnum):
    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True)
class Principal:
    """Authenticated identity attached to a request."""

    id: UUID
    kind: PrincipalKind
    token: str

    @property
    def is_admin(self) -> bool:
        return self.kind == PrincipalKind.ADMIN

    @property
    def is_user(self) -> bool:
        return self.kind == PrincipalKind.USER
