"""
JWT 기반 인증 모듈

- create_access_token: user_id 클레임을 담은 HS256 토큰 발급
- resolve_caller: "Bearer <token>" 형식의 자격 증명을 검증하여 user_id(UUID) 반환

Rationale:
    서비스 계층은 원본 자격 증명을 받지 않고, 여기서 검증이 끝난 user_id만 전달받습니다.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from app.core.config import JWT_ALGORITHM, JWT_EXPIRE_HOURS, JWT_SECRET
from app.exception.common.auth_exception import UnauthorizedError
from app.models.asset import NIL_UUID

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"


def create_access_token(user_id: uuid.UUID, expires_delta: Optional[timedelta] = None) -> str:
    """user_id에 대한 서명된 액세스 토큰 반환 (기본 만료: JWT_EXPIRE_HOURS)"""
    expiry = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=JWT_EXPIRE_HOURS))
    claims = {
        "user_id": str(user_id),
        "exp": int(expiry.timestamp()),
    }
    return jwt.encode(claims, JWT_SECRET, algorithm=JWT_ALGORITHM)


def resolve_caller(credential: Optional[str]) -> uuid.UUID:
    """
    Authorization 헤더 값을 검증하여 호출자 user_id 반환

    Args:
        credential (Optional[str]): "Bearer <token>" 형식의 헤더 값

    Returns:
        UUID: 토큰의 user_id 클레임

    Raises:
        UnauthorizedError: 헤더 누락, 스킴 불일치, 서명/만료 검증 실패,
            user_id 클레임 누락/형식 오류 또는 nil UUID인 경우
    """
    if not credential:
        raise UnauthorizedError()

    parts = credential.split(" ")
    if len(parts) != 2 or parts[0] != BEARER_SCHEME:
        logger.warning("resolve_caller: malformed authorization header")
        raise UnauthorizedError()

    try:
        claims = jwt.decode(parts[1], JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"resolve_caller: token rejected ({type(e).__name__})")
        raise UnauthorizedError()

    raw_user_id = claims.get("user_id")
    if not isinstance(raw_user_id, str):
        raise UnauthorizedError()

    try:
        user_id = uuid.UUID(raw_user_id)
    except ValueError:
        raise UnauthorizedError()

    if user_id == NIL_UUID:
        raise UnauthorizedError()
    return user_id
