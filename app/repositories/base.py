import uuid
from contextlib import AbstractContextManager
from typing import Optional, Protocol

from app.models.user import User


class IUserRepository(Protocol):
    """사용자(및 에셋 컬렉션) 저장소 인터페이스 (Repository Pattern Protocol)"""

    def get(self, user_id: uuid.UUID) -> Optional[User]:
        """
        사용자 조회

        Args:
            user_id (UUID): 사용자 식별 ID

        Returns:
            Optional[User]: 사용자 스냅샷(복사본). 없으면 None ("user not found")
        """
        ...

    def put(self, user: User) -> None:
        """
        사용자 추가 또는 덮어쓰기

        Args:
            user (User): 저장할 사용자 (저장소는 사본을 보관)
        """
        ...

    def exists(self, user_id: uuid.UUID) -> bool:
        ...

    def session(self, user_id: uuid.UUID) -> AbstractContextManager[Optional[User]]:
        """
        사용자 단위 배타 구간

        블록이 끝날 때까지 해당 사용자의 락을 유지한 채 실제 User 객체를 넘겨줍니다.
        favourites에 대한 모든 읽기-수정-쓰기는 이 블록 안에서 수행해야 합니다.

        Args:
            user_id (UUID): 사용자 식별 ID

        Returns:
            ContextManager[Optional[User]]: 사용자가 없으면 None을 yield
        """
        ...
