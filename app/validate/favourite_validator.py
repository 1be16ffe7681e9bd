import uuid
from typing import Optional
from app.exception.service.favorite_exception import InvalidAssetIdError

# --- 단위 검증 함수들 ---

def parse_page_param(value: Optional[str], minimum: int) -> Optional[int]:
    """
    limit/offset 쿼리 파라미터 파싱

    숫자가 아니거나 minimum 미만이면 에러 대신 None(미지정)으로 취급합니다.
    """
    if value is None or not value.strip():
        return None
    try:
        parsed = int(value)
    except ValueError:
        return None
    return parsed if parsed >= minimum else None

def parse_limit(value: Optional[str]) -> Optional[int]:
    """limit: 양수만 유효 (0 이하는 제한 없음)"""
    return parse_page_param(value, minimum=1)

def parse_offset(value: Optional[str]) -> Optional[int]:
    """offset: 0 이상만 유효"""
    return parse_page_param(value, minimum=0)

def validate_asset_id(value: Optional[str]) -> uuid.UUID:
    """asset_id 쿼리 파라미터를 UUID로 변환 (형식 오류 시 400)"""
    if not value:
        raise InvalidAssetIdError()
    try:
        return uuid.UUID(value)
    except ValueError:
        raise InvalidAssetIdError()
