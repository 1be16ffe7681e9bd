import uuid
from typing import List

from pydantic import BaseModel, Field

from app.models.asset import Asset


class User(BaseModel):
    """에셋 컬렉션을 소유하는 사용자.

    Args:
        id (UUID): 사용자 식별값. 토큰의 user_id 클레임과 동일.
        favourites (List[Asset]): 사용자의 에셋 목록. 삽입 순서가 곧 조회/페이지네이션 순서.

    Rationale:
        프로비저닝 시 한 번 생성되어 프로세스 수명 동안 유지됩니다.
        favourites는 저장소의 사용자 락 안에서만 변경됩니다.
    """
    id: uuid.UUID
    favourites: List[Asset] = Field(default_factory=list)

    def find_asset(self, asset_id: uuid.UUID) -> Asset | None:
        """삽입 순서 기준 첫 번째로 일치하는 에셋 반환"""
        for asset in self.favourites:
            if asset.get_id() == asset_id:
                return asset
        return None
