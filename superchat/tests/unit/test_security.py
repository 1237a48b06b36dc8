# superchat/tests/unit/test_security.py
import datetime

import jwt
import pytest

from superchat.config import AppConfig
from superchat.domain.entities import PrincipalKind
from superchat.infrastructure.security import SecurityService


@pytest.fixture
def security_service():
    config = AppConfig(SECRET_KEY="test_secret", ALGORITHM="HS256")
    return SecurityService(config)


def test_password_hashing(security_service):
    password = "testpassword"
    hashed = security_service.get_password_hash(password)
    assert security_service.verify_password(password, hashed)
    assert not security_service.verify_password("wrongpassword", hashed)


def test_otp_code_is_six_digits():
    for _ in range(50):
        code = SecurityService.generate_otp_code()
        assert len(code) == 6
        assert code.isdigit()


def test_user_token_round_trip(security_service):
    token, expires_at = security_service.create_user_token("abc")

    assert security_service.decode_session_token(token) == ("abc", PrincipalKind.USER)
    assert expires_at > datetime.datetime.now(datetime.timezone.utc)


def test_admin_token_carries_admin_kind(security_service):
    token, _ = security_service.create_admin_token("root-id")

    assert security_service.decode_session_token(token) == ("root-id", PrincipalKind.ADMIN)


def test_tokens_issued_together_differ(security_service):
    first, _ = security_service.create_user_token("abc")
    second, _ = security_service.create_user_token("abc")

    assert first != second


def test_expired_token_is_rejected(security_service):
    token, _ = security_service.create_session_token(
        "abc", PrincipalKind.USER, datetime.timedelta(seconds=-1)
    )

    assert security_service.decode_session_token(token) is None


def test_token_signed_with_other_key_is_rejected(security_service):
    forged = jwt.encode({"sub": "abc", "kind": "admin"}, "other", algorithm="HS256")

    assert security_service.decode_session_token(forged) is None


def test_unknown_kind_is_rejected(security_service):
    token = jwt.encode({"sub": "abc", "kind": "robot"}, "test_secret", algorithm="HS256")

    assert security_service.decode_session_token(token) is None
