from __future__ import annotations
import uuid
from functools import lru_cache
from fastapi import Depends, Header

from app.core.security import resolve_caller
from app.repositories.base import IUserRepository
from app.repositories.memory import InMemoryUserRepository
from app.services.favourite_service import FavouriteService


@lru_cache(maxsize=1)
def get_user_repository() -> IUserRepository:
    """
    User Repository 의존성 주입 (Singleton via lru_cache)

    Returns:
        IUserRepository: 프로세스 전역 In-Memory 저장소 (캐싱된 인스턴스)
    """
    return InMemoryUserRepository()


def get_favourite_service(
    repo: IUserRepository = Depends(get_user_repository)
) -> FavouriteService:
    """FavouriteService 인스턴스 반환 (DI용)."""
    return FavouriteService(repo)


def get_current_user_id(
    authorization: str | None = Header(default=None)
) -> uuid.UUID:
    """
    Authorization 헤더(Bearer JWT) 검증 후 호출자 user_id 반환 Dependency

    Raises:
        UnauthorizedError(401): 헤더가 없거나 토큰이 유효하지 않은 경우
    """
    return resolve_caller(authorization)
