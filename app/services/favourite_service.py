"""
즐겨찾기(에셋) 서비스

사용자별 에셋 컬렉션에 대한 조회/추가/즐겨찾기 토글/설명 수정/삭제를 제공합니다.

주요 기능:
- favorite == True 인 에셋만 삽입 순서대로 조회 (limit/offset 페이지네이션)
- kind 값으로 Chart/Insight/Audience 중 하나를 선택하여 payload 파싱 후 추가
- id 기준 첫 번째 일치 에셋의 즐겨찾기 여부/설명 변경 및 삭제

설계 결정:
- 모든 연산은 저장소의 session() 블록 하나 안에서 수행 (사용자 단위 직렬화)
- 반환값은 복사본이므로 호출자가 수정해도 저장소 상태는 바뀌지 않음
- 실패 시 예외를 던지고 상태는 변경하지 않음 (부분 반영 없음)
"""

import logging
import uuid
from typing import Any, List, Optional

from pydantic import ValidationError

from app.exception.service.favorite_exception import (
    AssetNotFoundError,
    InvalidAssetPayloadError,
    UnknownAssetTypeError,
    UserNotFoundError,
)
from app.models.asset import ASSET_MODELS, NIL_UUID, Asset, AssetKind
from app.models.user import User
from app.repositories.base import IUserRepository

logger = logging.getLogger("app")


def paginate(items: List[Asset], limit: Optional[int] = None, offset: Optional[int] = None) -> List[Asset]:
    """
    삽입 순서를 유지한 채 offset/limit 적용

    - offset: 음수/None은 0으로 취급, 길이를 넘으면 길이로 클램프
    - limit: 0/음수/None은 제한 없음
    """
    start = offset if offset is not None and offset >= 0 else 0
    start = min(start, len(items))
    end = len(items)
    if limit is not None and limit > 0:
        end = min(start + limit, end)
    return items[start:end]


class FavouriteService:
    """사용자 에셋 컬렉션 서비스.

    사용 예시:
        >>> service = FavouriteService(InMemoryUserRepository())
        >>> asset = service.add_asset(user_id, "chart", {"title": "Sales"}, favorite=True)
        >>> service.list_favourites(user_id, limit=10)

    Attributes:
        repo: 사용자 저장소 (session()으로 사용자 단위 락 제공)
    """

    def __init__(self, repo: IUserRepository):
        self.repo = repo

    def _require_user(self, user: Optional[User], user_id: uuid.UUID, operation: str) -> User:
        if user is None:
            logger.warning(f"{operation}: user not found {user_id}")
            raise UserNotFoundError()
        return user

    def _require_asset(self, user: User, asset_id: uuid.UUID, operation: str) -> Asset:
        asset = user.find_asset(asset_id)
        if asset is None:
            logger.warning(f"{operation}: asset not found {asset_id}")
            raise AssetNotFoundError()
        return asset

    def list_favourites(
        self,
        user_id: uuid.UUID,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Asset]:
        """
        즐겨찾기 목록 조회

        Args:
            user_id (UUID): 인증된 사용자 ID
            limit (Optional[int]): 최대 반환 개수 (0 또는 None이면 제한 없음)
            offset (Optional[int]): 건너뛸 선두 개수

        Returns:
            List[Asset]: favorite == True 인 에셋 (삽입 순서). 없으면 빈 리스트

        Raises:
            UserNotFoundError: 사용자가 없는 경우
        """
        with self.repo.session(user_id) as user:
            user = self._require_user(user, user_id, "list_favourites")
            favs = [asset for asset in user.favourites if asset.is_favorite()]
            paged = [asset.model_copy(deep=True) for asset in paginate(favs, limit, offset)]

        logger.info(f"list_favourites: returning {len(paged)} of {len(favs)} assets for user {user_id}")
        return paged

    def add_asset(self, user_id: uuid.UUID, kind: str, payload: Any, favorite: bool) -> Asset:
        """
        에셋 추가

        Args:
            user_id (UUID): 인증된 사용자 ID
            kind (str): 에셋 종류 ("chart" | "insight" | "audience")
            payload (Any): 해당 종류의 필드를 담은 dict
            favorite (bool): 즐겨찾기 여부 (payload의 favorite 값보다 우선)

        Returns:
            Asset: 생성된 에셋. id가 없거나 nil UUID이면 새 id가 부여됨

        Raises:
            UserNotFoundError: 사용자가 없는 경우
            UnknownAssetTypeError: kind가 알 수 없는 값인 경우
            InvalidAssetPayloadError: payload가 해당 종류로 파싱되지 않는 경우
        """
        if not self.repo.exists(user_id):
            self._require_user(None, user_id, "add_asset")

        # 파싱은 락 밖에서 먼저 수행 (실패 시 상태 변경 없음)
        asset = self._build_asset(kind, payload, favorite)

        with self.repo.session(user_id) as user:
            user = self._require_user(user, user_id, "add_asset")
            user.favourites.append(asset)

        logger.info(f"add_asset: asset added for user {user_id}, type {asset.kind}, id {asset.get_id()}")
        return asset.model_copy(deep=True)

    def _build_asset(self, kind: str, payload: Any, favorite: bool) -> Asset:
        try:
            asset_kind = AssetKind(kind)
        except ValueError:
            logger.warning(f"add_asset: unknown asset type {kind!r}")
            raise UnknownAssetTypeError()

        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            logger.warning(f"add_asset: {asset_kind.value} payload is not an object")
            raise InvalidAssetPayloadError(asset_kind.value)

        model = ASSET_MODELS[asset_kind]
        try:
            # 판별자는 envelope의 kind를 따른다
            parsed = model.model_validate({**payload, "type": asset_kind.value})
        except ValidationError as e:
            logger.warning(f"add_asset: invalid {asset_kind.value} asset: {e.error_count()} error(s)")
            raise InvalidAssetPayloadError(asset_kind.value)

        update: dict[str, Any] = {"favorite": favorite}
        if parsed.get_id() == NIL_UUID:
            update["id"] = uuid.uuid4()
        # NOTE: 호출자가 지정한 id는 기존 id와 중복 여부를 검사하지 않고 그대로 사용
        return parsed.model_copy(update=update)

    def set_favorite(self, user_id: uuid.UUID, asset_id: uuid.UUID, favorite: bool) -> Asset:
        """
        에셋의 즐겨찾기 여부 변경

        Raises:
            UserNotFoundError: 사용자가 없는 경우
            AssetNotFoundError: 해당 id의 에셋이 없는 경우
        """
        with self.repo.session(user_id) as user:
            user = self._require_user(user, user_id, "set_favorite")
            asset = self._require_asset(user, asset_id, "set_favorite")
            asset.set_favorite(favorite)
            updated = asset.model_copy(deep=True)

        logger.info(f"set_favorite: updated favorite for asset {asset_id} to {favorite}")
        return updated

    def set_description(self, user_id: uuid.UUID, asset_id: uuid.UUID, description: str) -> Asset:
        """
        에셋 설명 변경 (빈 문자열도 유효한 값으로 덮어씀)

        Raises:
            UserNotFoundError: 사용자가 없는 경우
            AssetNotFoundError: 해당 id의 에셋이 없는 경우
        """
        with self.repo.session(user_id) as user:
            user = self._require_user(user, user_id, "set_description")
            asset = self._require_asset(user, asset_id, "set_description")
            asset.set_description(description)
            updated = asset.model_copy(deep=True)

        logger.info(f"set_description: updated description for asset {asset_id} to {description!r}")
        return updated

    def delete_asset(self, user_id: uuid.UUID, asset_id: uuid.UUID) -> List[Asset]:
        """
        에셋 삭제

        삽입 순서상 첫 번째로 일치하는 에셋 하나만 제거하며 나머지의 상대 순서는 유지됩니다.

        Returns:
            List[Asset]: 삭제 후 남은 전체 에셋 목록

        Raises:
            UserNotFoundError: 사용자가 없는 경우
            AssetNotFoundError: 해당 id의 에셋이 없는 경우
        """
        with self.repo.session(user_id) as user:
            user = self._require_user(user, user_id, "delete_asset")
            asset = self._require_asset(user, asset_id, "delete_asset")
            # list.remove는 동등성 비교라 동일 필드의 다른 에셋을 지울 수 있으므로 identity로 찾는다
            index = next(i for i, a in enumerate(user.favourites) if a is asset)
            del user.favourites[index]
            remaining = [a.model_copy(deep=True) for a in user.favourites]

        logger.info(f"delete_asset: asset {asset_id} deleted, {len(remaining)} assets remain for user {user_id}")
        return remaining
