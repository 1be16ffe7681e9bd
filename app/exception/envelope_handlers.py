from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from slowapi.errors import RateLimitExceeded
import logging
from app.core.response import error_response, ValidationErrorDetail
from datetime import datetime
from app.core.error_codes import ErrorCode
from app.exception.base_exception import BaseCustomException
from app.exception.common.rate_limit_exception import RateLimitException
from app.exception.common.request_exception import InvalidRequestError
from app.core.config import IS_DEBUG
import traceback

logger = logging.getLogger("app")


async def custom_exception_handler(request: Request, exc: BaseCustomException):
    """
    비즈니스 로직 예외(BaseCustomException)를 ApiResponse 포맷으로 변환

    Rationale:
        도메인 로직에서 발생한 예외(NotFound, BadRequest, Unauthorized 등)를
        표준 에러 응답으로 변환합니다. 4xx 에러이므로 경고 수준으로 로깅합니다.
    """
    # error_code가 Enum이면 .value, 아니면 그대로 사용
    error_code_value = exc.error_code.value if hasattr(exc.error_code, 'value') else exc.error_code

    logger.warning({
        "timestamp": datetime.now().isoformat(timespec="seconds"),
        "status": exc.status_code,
        "errorCode": error_code_value,
        "message": exc.message,
        "client_ip": request.client.host if request.client else None,
        "path": request.url.path
    })
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(
            message=exc.message,
            code=error_code_value
        ).model_dump()
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    HTTPException(404 경로 없음, 405 허용되지 않은 메서드 등)을 ApiResponse 포맷으로 변환

    Rationale:
        라우팅 단계에서 발생한 에러도 프론트엔드가 동일한 Envelope Pattern으로 받도록 합니다.
        405 응답의 Allow 헤더는 유지합니다.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(
            message=str(exc.detail),
            code=ErrorCode.http_error(exc.status_code)
        ).model_dump(),
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    요청 검증 실패(RequestValidationError)를 400 ApiResponse 포맷으로 변환

    Rationale:
        JSON 디코딩 실패, 필드 타입 불일치 등 잘못된 입력은 모두 BadRequest로 응답합니다.
        필드별 상세 정보는 result에 담아 프론트엔드가 표시할 수 있게 합니다.
    """
    error_details = {}
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        error_details[field] = ValidationErrorDetail(
            message=error["msg"],
            type=error["type"],
            input=error.get("input")
        ).model_dump(mode="json")

    bad_request = InvalidRequestError()
    logger.warning({
        "status": bad_request.status_code,
        "errorCode": bad_request.error_code.value,
        "message": bad_request.message,
        "fields": list(error_details),
        "path": request.url.path
    })
    return JSONResponse(
        status_code=bad_request.status_code,
        content=error_response(
            message=bad_request.message,
            code=bad_request.error_code.value,
            result=error_details
        ).model_dump(mode="json")
    )


async def global_exception_handler_envelope(request: Request, exc: Exception):
    """
    모든 예외(500 포함)를 ApiResponse 포맷으로 변환

    Rationale:
        예상치 못한 서버 에러 발생 시 상세 스택 트레이스는 로그에만 기록하고,
        클라이언트에게는 일반적인 메시지만 반환합니다.
    """
    # Trace ID는 로깅 필터에서 자동으로 주입됨
    logger.exception(
        f"Unhandled Exception: {str(exc)}",
        extra={
            "path": request.url.path,
            "method": request.method,
            "client_ip": request.client.host if request.client else None,
        }
    )

    # 디버그 모드가 아닐 경우 상세 에러 정보(Stack Trace 등)를 노출하지 않음
    if IS_DEBUG:
        error_result = {
            "error_detail": str(exc),
            "stack_trace": traceback.format_exc()
        }
    else:
        error_result = None

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response(
            message="서버 내부 오류가 발생했습니다. 담당자에게 문의해주세요.",
            code=ErrorCode.INTERNAL_ERROR,
            result=error_result
        ).model_dump()
    )


async def rate_limit_exception_handler(request: Request, exc: RateLimitExceeded):
    """
    Rate Limit 초과 예외 핸들러

    slowapi의 RateLimitExceeded 예외를 비즈니스 예외(RateLimitException)로 변환하여
    일관된 에러 응답 포맷을 유지합니다.

    Returns:
        JSONResponse: 429 Too Many Requests 응답
    """
    rate_limit_exc = RateLimitException()
    return await custom_exception_handler(request, rate_limit_exc)
