"""
JWT 발급/검증(resolve_caller) 테스트
"""

import uuid
from datetime import timedelta

import pytest
from jose import jwt

from app.core.config import JWT_ALGORITHM, JWT_SECRET
from app.core.security import create_access_token, resolve_caller
from app.exception.common.auth_exception import UnauthorizedError
from app.models.asset import NIL_UUID


def test_round_trip():
    user_id = uuid.uuid4()
    token = create_access_token(user_id)

    assert resolve_caller(f"Bearer {token}") == user_id


def test_token_claims():
    user_id = uuid.uuid4()
    claims = jwt.decode(create_access_token(user_id), JWT_SECRET, algorithms=[JWT_ALGORITHM])

    assert claims["user_id"] == str(user_id)
    assert isinstance(claims["exp"], int)


@pytest.mark.parametrize("credential", [
    None,
    "",
    "Bearer",
    "Token abc",
    "Bearer a b",
    "Bearer not-a-jwt",
])
def test_malformed_credentials(credential):
    with pytest.raises(UnauthorizedError):
        resolve_caller(credential)


def test_expired_token():
    token = create_access_token(uuid.uuid4(), expires_delta=timedelta(seconds=-10))
    with pytest.raises(UnauthorizedError):
        resolve_caller(f"Bearer {token}")


def test_wrong_signature():
    token = jwt.encode({"user_id": str(uuid.uuid4())}, "other-secret", algorithm="HS256")
    with pytest.raises(UnauthorizedError):
        resolve_caller(f"Bearer {token}")


@pytest.mark.parametrize("claims", [
    {},
    {"user_id": 123},
    {"user_id": "not-a-uuid"},
    {"user_id": str(NIL_UUID)},
])
def test_invalid_user_id_claim(claims):
    token = jwt.encode(claims, JWT_SECRET, algorithm=JWT_ALGORITHM)
    with pytest.raises(UnauthorizedError):
        resolve_caller(f"Bearer {token}")
