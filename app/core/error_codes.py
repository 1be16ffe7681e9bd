"""
응답 코드 상수 정의

매직 스트링 대신 상수를 사용하여 오타 방지 및 일관성 확보
(도메인 예외 코드는 app.exception.base_exception.ErrorCode 참고)
"""

class ErrorCode:
    """응답 코드 상수 클래스"""

    # 공통 성공 코드
    COMMON_SUCCESS = "COMMON200"  # 모든 API 성공 응답에 사용

    # 공통 에러 코드
    INTERNAL_ERROR = "COMMON-001"    # 500 서버 내부 오류

    @staticmethod
    def http_error(status_code: int) -> str:
        """
        HTTP 상태 코드 기반 에러 코드 생성

        Args:
            status_code: HTTP 상태 코드 (예: 404, 405)

        Returns:
            str: 에러 코드 (예: "HTTP_404", "HTTP_405")
        """
        return f"HTTP_{status_code}"
