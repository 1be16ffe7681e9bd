# =============================================================================
# 공통 HTTP 미들웨어
# =============================================================================
# - Trace ID: 요청별 추적 ID 부여 및 로깅 컨텍스트 전파
# - Cache-Control: 사용자별 데이터(즐겨찾기, 토큰) 응답 캐시 방지
# - Real IP: 프록시 뒤 실제 클라이언트 IP 추출 (Rate Limit 키로도 사용)
# =============================================================================
import logging
import uuid
import re
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from app.core.context import set_trace_id

logger = logging.getLogger(__name__)

# UUID 형식 검증 정규식 (8-4-4-4-12)
UUID_PATTERN = re.compile(
    r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$',
    re.IGNORECASE
)

# 캐시 방지 대상 경로
NO_CACHE_PATH_PREFIXES = ("/favourites", "/token")


class TraceIDMiddleware(BaseHTTPMiddleware):
    """
    요청별 Trace ID 부여 미들웨어

    서비스 로그(에셋 추가/삭제 등)를 요청 단위로 묶어 볼 수 있도록 합니다.
    - 요청 헤더(X-Trace-ID)가 존재하면 해당 값을 사용 (분산 추적 연동)
    - 없으면 새로운 UUIDv4를 생성하여 할당 (Fallback)
    - 응답 헤더(X-Trace-ID)에 포함하여 클라이언트에 반환

    Attributes:
        TRACE_ID_HEADER (str): "X-Trace-ID"
    """

    TRACE_ID_HEADER = "X-Trace-ID"

    async def dispatch(self, request: Request, call_next) -> Response:
        # 1. 클라이언트가 보낸 Trace ID 확인
        trace_id = request.headers.get(self.TRACE_ID_HEADER)
        
        # 2. UUID 형식이 아니면 로그 오염 방지를 위해 무시하고 새로 발급
        if trace_id and not UUID_PATTERN.match(trace_id):
            logger.warning(f"Invalid Trace ID received: {trace_id}")
            trace_id = None

        # 3. 없으면 신규 생성 (Fallback)
        if not trace_id:
            trace_id = str(uuid.uuid4())
        
        # 4. 컨텍스트 변수에 설정 (로거에서 참조 가능)
        set_trace_id(trace_id)
        request.state.trace_id = trace_id
        
        response = await call_next(request)
        
        # 5. 응답 헤더에 Trace ID 포함
        response.headers[self.TRACE_ID_HEADER] = trace_id
        return response


class CacheControlMiddleware(BaseHTTPMiddleware):
    """
    사용자별 데이터 경로(즐겨찾기, 토큰)에 Cache-Control 헤더를 추가하여
    중간 프록시가 다른 사용자의 응답을 캐싱하지 않도록 합니다.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        if request.url.path.startswith(NO_CACHE_PATH_PREFIXES):
            response.headers["Cache-Control"] = (
                "no-store, no-cache, must-revalidate, max-age=0"
            )
            response.headers["Pragma"] = "no-cache"
            response.headers["Expires"] = "0"

        return response


def extract_client_ip(request: Request) -> str:
    """
    프록시 헤더를 고려한 클라이언트 IP 추출

    우선순위: X-Forwarded-For 첫 번째 IP > X-Real-IP > request.client.host
    """
    x_forwarded_for = request.headers.get("X-Forwarded-For")
    if x_forwarded_for:
        return x_forwarded_for.split(",")[0].strip()

    x_real_ip = request.headers.get("X-Real-IP")
    if x_real_ip:
        return x_real_ip.strip()

    if request.client:
        return request.client.host
    return "unknown"


class RealIPMiddleware(BaseHTTPMiddleware):
    """실제 클라이언트 IP를 request.state에 저장하고 요청 로그를 남깁니다."""

    async def dispatch(self, request: Request, call_next) -> Response:
        real_ip = extract_client_ip(request)
        request.state.real_ip = real_ip

        # 헬스체크 제외
        if request.url.path != "/ping":
            logger.info(
                f"[{real_ip}] {request.method} {request.url.path}",
                extra={
                    "real_ip": real_ip,
                    "method": request.method,
                    "path": request.url.path,
                    "user_agent": request.headers.get("User-Agent", ""),
                },
            )

        return await call_next(request)


def get_real_ip(request: Request) -> str:
    """
    Rate Limit 키 함수. RealIPMiddleware가 저장한 값을 우선 사용하고,
    미들웨어를 거치지 않은 경우 직접 추출합니다.
    """
    return getattr(request.state, "real_ip", None) or extract_client_ip(request)
