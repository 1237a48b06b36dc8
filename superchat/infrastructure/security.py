import datetime
import secrets
from typing import Optional

import jwt
from jwt import ExpiredSignatureError, InvalidTokenError
from passlib.context import CryptContext

from superchat.domain.entities import PrincipalKind

OTP_LENGTH = 6


class SecurityService:
    def __init__(self, config):
        self.config = config
        self.pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

    def verify_password(self, plain_password, hashed_password):
        return self.pwd_context.verify(plain_password, hashed_password)

    def get_password_hash(self, password):
        return self.pwd_context.hash(password)

    @staticmethod
    def generate_otp_code() -> str:
        return f"{secrets.randbelow(10 ** OTP_LENGTH):0{OTP_LENGTH}d}"

    def create_session_token(
        self, subject: str, kind: PrincipalKind, expires_delta: datetime.timedelta
    ):
        expire = datetime.datetime.now(datetime.timezone.utc) + expires_delta
        to_encode = {
            "sub": subject,
            "kind": kind.value,
            "exp": expire,
            # two sessions issued in the same second must not collide
            "nonce": secrets.token_hex(8),
        }
        encoded_jwt = jwt.encode(
            to_encode, self.config.SECRET_KEY, algorithm=self.config.ALGORITHM
        )
        return encoded_jwt, expire

    def create_user_token(self, user_id: str):
        return self.create_session_token(
            user_id,
            PrincipalKind.USER,
            datetime.timedelta(days=self.config.SESSION_TOKEN_EXPIRE_DAYS),
        )

    def create_admin_token(self, admin_id: str):
        return self.create_session_token(
            admin_id,
            PrincipalKind.ADMIN,
            datetime.timedelta(minutes=self.config.ADMIN_TOKEN_EXPIRE_MINUTES),
        )

    def decode_session_token(self, token: str) -> Optional[tuple[str, PrincipalKind]]:
        try:
            payload = jwt.decode(
                token, self.config.SECRET_KEY, algorithms=[self.config.ALGORITHM]
            )
        except (ExpiredSignatureError, InvalidTokenError):
            return None
        subject = payload.get("sub")
        try:
            kind = PrincipalKind(payload.get("kind"))
        except ValueError:
            return None
        if subject is None:
            return None
        return subject, kind
