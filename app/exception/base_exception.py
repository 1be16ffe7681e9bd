from enum import Enum

class ErrorCode(str, Enum):
    """
    애플리케이션 전반에서 사용하는 에러 코드 정의.
    형식: 카테고리(영문)-번호(3자리)
    """
    # 1. COMMON: 공통/일반 에러
    GENERIC_UNKNOWN = "GENERIC-000"
    COMMON_INTERNAL_ERROR = "COMMON-001"
    COMMON_BAD_REQUEST = "COMMON-002"  # 요청 본문 파싱/타입 오류

    # 2. FAVORITE: 즐겨찾기(에셋) 관련
    USER_NOT_FOUND = "FAV-001"
    ASSET_NOT_FOUND = "FAV-002"
    UNKNOWN_ASSET_TYPE = "FAV-003"
    INVALID_ASSET_PAYLOAD = "FAV-004"
    INVALID_ASSET_ID = "FAV-005"

    # 3. AUTH: 토큰 발급/검증 관련
    UNAUTHORIZED = "AUTH-001"
    INVALID_USER_ID = "AUTH-002"

    # 4. RATE: 요청 제한
    RATE_LIMIT_EXCEEDED = "RATE-001"


class BaseCustomException(Exception):
    """
    모든 커스텀 예외의 최상위 클래스.
    이 클래스를 상속받아 구체적인 예외를 정의해야 함.
    """
    error_code: ErrorCode = ErrorCode.GENERIC_UNKNOWN
    message: str = "알 수 없는 오류가 발생했습니다."
    status_code: int = 500

    def __init__(self, message: str = None, error_code: ErrorCode = None, status_code: int = None):
        if message:
            self.message = message
        if error_code:
            self.error_code = error_code
        if status_code:
            self.status_code = status_code
        super().__init__(self.message)
